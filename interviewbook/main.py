"""InterviewBook API entry point.

Run with:
    uvicorn interviewbook.main:app --reload

Or:
    python -m interviewbook.main
"""

import logging

from interviewbook.api import create_app
from interviewbook.config import HOST, LOG_LEVEL, PORT

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("interviewbook.main:app", host=HOST, port=PORT)
