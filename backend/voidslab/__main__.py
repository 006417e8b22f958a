"""
python -m voidslab: serve the API with uvicorn on PORT (default 5000).
"""
import uvicorn

from voidslab.config import settings


def main() -> None:
    uvicorn.run("voidslab.main:app", host="0.0.0.0", port=settings.port, reload=settings.debug)


if __name__ == "__main__":
    main()
