"""test_preview.py
Markdown/HTML projection of a resume and the print hook.
"""

from resume_builder.builder.preview import SECTION_TITLES, ResumePreview
from resume_builder.schemas.pydantic import (
    Award,
    Education,
    Experience,
    PersonalInfo,
    Project,
    ResumeDocument,
    Skill,
)


def full_document():
    return ResumeDocument(
        title="Jane's CV",
        personal_info=PersonalInfo(
            full_name="Jane Doe",
            email="jane@example.com",
            phone="9876543210",
            city="Pune",
            country="India",
            github_url="https://github.com/jane",
            summary="Backend engineer.",
        ),
        experiences=[Experience(company="Acme", position="Engineer", start_year="2020", current_job=True)],
        educations=[Education(institution="MIT", degree="BSc", field_of_study="CS", start_year="2012", end_year="2016")],
        awards=[Award(title="Hackathon winner", issuer="Acme")],
        projects=[Project(name="resume-builder", description="This project.", technologies="Python")],
        skills=[Skill(name="Python", level="Expert"), Skill(name="Go")],
    )


class TestResumePreview:
    def test_sections_in_fixed_order(self):
        titles = [title for title, _ in ResumePreview(full_document()).sections()]
        assert titles == [t for t in SECTION_TITLES if t != "Certifications & Training"]

    def test_empty_sections_omitted(self):
        preview = ResumePreview(ResumeDocument(personal_info=PersonalInfo(full_name="Jane")))
        assert preview.sections() == []
        markdown_text = preview.to_markdown()
        assert "## " not in markdown_text
        assert markdown_text.startswith("# Jane")

    def test_current_job_shows_present(self):
        markdown_text = ResumePreview(full_document()).to_markdown()
        assert "2020 - Present" in markdown_text

    def test_header_lines(self):
        markdown_text = ResumePreview(full_document()).to_markdown()
        assert "Pune, India" in markdown_text
        assert "jane@example.com | 9876543210" in markdown_text
        assert "GitHub: https://github.com/jane" in markdown_text

    def test_skills_rendered_as_list(self):
        markdown_text = ResumePreview(full_document()).to_markdown()
        assert "- Python (Expert)" in markdown_text
        assert "- Go" in markdown_text

    def test_html_and_print_hook(self):
        printed = []
        preview = ResumePreview(full_document(), trigger_print=printed.append)
        html = preview.to_html()
        assert "<h1>Jane Doe</h1>" in html
        assert "<h2>Work Experience</h2>" in html
        preview.print_resume()
        assert printed == [html]


class TestUserTextIsLiteral:
    def hostile_document(self):
        return ResumeDocument(
            title="<b>Mine</b>",
            personal_info=PersonalInfo(
                full_name="Jane",
                summary="<script>alert(1)</script>\n# Not a heading\n1. not a list\n*not emphasis*",
            ),
            skills=[Skill(name="C++ <img src=x onerror=alert(1)>")],
        )

    def test_markup_in_fields_is_escaped(self):
        html = ResumePreview(self.hostile_document()).to_html()
        assert "<script>" not in html
        assert "<img" not in html
        assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html
        assert "<li>C++ &lt;img src=x onerror=alert(1)&gt;</li>" in html

    def test_markdown_syntax_in_fields_is_plain_text(self):
        html = ResumePreview(self.hostile_document()).to_html()
        assert "<h1>Not a heading</h1>" not in html
        assert "# Not a heading" in html
        assert "<ol>" not in html
        assert "1. not a list" in html
        assert "<em>" not in html
        assert "*not emphasis*" in html

    def test_title_escaped_in_page(self):
        html = ResumePreview(self.hostile_document()).to_html()
        assert "<title>&lt;b&gt;Mine&lt;/b&gt;</title>" in html
        assert "<b>" not in html

    def test_ordinary_punctuation_untouched(self):
        preview = ResumePreview(
            ResumeDocument(
                personal_info=PersonalInfo(full_name="Jane", summary="Built a C# service - fast."),
                skills=[Skill(name="Node.js")],
            )
        )
        html = preview.to_html()
        assert "Built a C# service - fast." in html
        assert "<li>Node.js</li>" in html
