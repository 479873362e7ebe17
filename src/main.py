"""
ReelCut - Entry Point

Prints the saved projects of the local project store.
"""
import asyncio
import logging
import sys
from pathlib import Path

# Add src to path for running as script
sys.path.insert(0, str(Path(__file__).parent))

from PyQt6.QtCore import QCoreApplication

from config import LOG_LEVEL, LOG_FORMAT
from core.session import EditorSession
from core.timecode import format_duration


def configure_logging(level: str = LOG_LEVEL):
    logging.basicConfig(level=level, format=LOG_FORMAT)


async def list_projects(session: EditorSession, search_query: str = "") -> int:
    await session.project.load_all_projects_metadata()
    projects = session.project.get_filtered_and_sorted_projects(search_query)
    for meta in projects:
        print(f"{meta.id}  {format_duration(meta.duration):>8}  "
              f"{meta.updated_at:%Y-%m-%d %H:%M}  {meta.name}")
    return len(projects)


def main():
    """Application entry point"""
    configure_logging()
    app = QCoreApplication(sys.argv)  # noqa: F841  (QSettings needs an application)
    session = EditorSession()
    search_query = " ".join(sys.argv[1:])
    count = asyncio.run(list_projects(session, search_query))
    if count == 0:
        print("No saved projects.")


if __name__ == "__main__":
    main()
