"""Bricksy entrypoint.

Run with:
  python -m bricksy
"""
import uvicorn
from bricksy.core.config import settings


def main() -> None:
    uvicorn.run("bricksy.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
