"""Example: use the service layer directly (no Flask).

Prints the hours report of one student, looked up by matricula.
"""

import importlib
import sys

from config import get_settings_module

from src.extentrack.extentrack.container import build_container


def main():
    matricula = sys.argv[1] if len(sys.argv) > 1 else "2023001"
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    report = container.report_service.lookup_student_report(matricula)
    print(container.report_service.render(report).content)


if __name__ == "__main__":
    main()
