"""test_editors.py
Section editors: commit operations, form view and personal info.
"""

import pytest

from resume_builder.builder.editors import (
    FORM_ERROR_BANNER,
    EditorBusyError,
    EducationEditor,
    EntryValidationError,
    ExperienceEditor,
    PersonalInfoEditor,
    ProjectsEditor,
    SkillsEditor,
    ViewMode,
)
from resume_builder.schemas.pydantic import Education, Pending, Persisted, PersonalInfo


@pytest.fixture
def published():
    return []


def make_education(**overrides):
    data = {"institution": "MIT", "degree": "BSc", "start_year": "2015"}
    data.update(overrides)
    return data


class TestCommitOperations:
    def test_add_assigns_pending_id_and_publishes(self, published):
        editor = EducationEditor([], published.append)
        entries = editor.add(make_education())
        assert len(entries) == 1
        assert isinstance(entries[0].id, Pending)
        assert published[-1] == entries

    def test_add_rejects_missing_required_fields(self, published):
        editor = EducationEditor([], published.append)
        with pytest.raises(EntryValidationError) as exc:
            editor.add({"institution": "MIT"})
        assert set(exc.value.errors) == {"degree", "start_year"}
        assert published == []

    def test_edit_keeps_identifier(self, published):
        original = Education(id=Persisted(server_id=3), **make_education())
        editor = EducationEditor([original], published.append)
        entries = editor.edit(0, make_education(degree="MSc"))
        assert entries[0].id == Persisted(server_id=3)
        assert entries[0].degree == "MSc"

    def test_delete_last_entry_leaves_empty_list(self, published):
        editor = EducationEditor([Education(id=Persisted(server_id=1), **make_education())], published.append)
        assert editor.delete(0) == []
        assert published[-1] == []

    def test_bad_index(self, published):
        editor = EducationEditor([], published.append)
        with pytest.raises(IndexError):
            editor.delete(0)

    def test_published_value_is_a_copy(self, published):
        editor = EducationEditor([], published.append)
        editor.add(make_education())
        published[-1][0].degree = "changed"
        assert editor.entries[0].degree == "BSc"


class TestFormView:
    def test_submit_invalid_keeps_form_open(self, published):
        editor = ExperienceEditor([], published.append)
        editor.start_add()
        editor.set_field("company", "Acme")
        assert editor.submit() is False
        assert editor.mode is ViewMode.FORM
        assert editor.banner == FORM_ERROR_BANNER
        assert "position" in editor.errors
        assert published == []

    def test_submit_valid_returns_to_list(self, published):
        editor = ExperienceEditor([], published.append)
        editor.start_add()
        for name, value in {"company": "Acme", "position": "Engineer", "start_year": "2020"}.items():
            editor.set_field(name, value)
        assert editor.submit() is True
        assert editor.mode is ViewMode.LIST
        assert published[-1][0].company == "Acme"

    def test_current_job_clears_end_year_in_draft(self, published):
        editor = ExperienceEditor([], published.append)
        editor.start_add()
        editor.set_field("end_year", "2022")
        editor.set_field("current_job", True)
        assert editor.draft.end_year == ""

    def test_blur_reports_single_field(self, published):
        editor = EducationEditor([], published.append)
        editor.start_add()
        assert editor.blur("institution") == "Institution is required"
        editor.set_field("institution", "MIT")
        assert editor.blur("institution") is None
        assert "institution" not in editor.errors

    def test_only_one_entry_open(self, published):
        editor = EducationEditor([Education(**make_education())], published.append)
        editor.start_edit(0)
        with pytest.raises(EditorBusyError):
            editor.start_add()

    def test_cancel_discards_draft(self, published):
        editor = EducationEditor([Education(**make_education())], published.append)
        editor.start_edit(0)
        editor.set_field("degree", "PhD")
        editor.cancel()
        assert editor.entries[0].degree == "BSc"
        assert published == []

    def test_project_link_must_be_url(self, published):
        editor = ProjectsEditor([], published.append)
        with pytest.raises(EntryValidationError) as exc:
            editor.add({"name": "CLI", "description": "A tool", "link": "not a link"})
        assert exc.value.errors == {"link": "Must be a valid URL"}


class TestSkillsEditor:
    def test_add_and_remove(self, published):
        editor = SkillsEditor([], published.append)
        skills = editor.add("Python", "Expert")
        assert skills[0].name == "Python"
        assert editor.remove(skills[0].id) == []
        assert published[-1] == []

    def test_rejects_blank_name_and_unknown_level(self, published):
        editor = SkillsEditor([], published.append)
        with pytest.raises(EntryValidationError) as exc:
            editor.add("  ", "Guru")
        assert set(exc.value.errors) == {"name", "level"}


class TestPersonalInfoEditor:
    def test_every_change_is_published(self, published):
        editor = PersonalInfoEditor(PersonalInfo(), published.append)
        editor.change("full_name", "Jane Doe")
        editor.change("city", "Pune")
        assert [p.full_name for p in published] == ["Jane Doe", "Jane Doe"]
        assert published[-1].city == "Pune"

    def test_validate_collects_errors(self, published):
        editor = PersonalInfoEditor(PersonalInfo(phone="123", github_url="nope"), published.append)
        errors = editor.validate()
        assert set(errors) == {"full_name", "email", "phone", "github_url"}

    def test_unknown_field(self, published):
        editor = PersonalInfoEditor(PersonalInfo(), published.append)
        with pytest.raises(KeyError):
            editor.change("nickname", "JD")
