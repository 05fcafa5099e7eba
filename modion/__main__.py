import uvicorn

from modion.api.deps import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run("modion.api.main:app", host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
