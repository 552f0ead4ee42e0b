import uvicorn
from .base import create_app
from .core import settings

app = create_app()


def run() -> None:
    uvicorn.run("resume_builder.main:app", host=settings.HOST, port=settings.PORT, reload=settings.ENV == "local")


if __name__ == "__main__":
    run()
