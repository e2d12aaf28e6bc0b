"""Example: call the service layer directly (no Flask).

Prints the most recent attendance records of organization 1.
"""

import importlib
from itertools import islice

from config import get_settings_module

from src.hrms.hrms.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, upload_dir=settings.UPLOAD_DIR)
    for record in islice(container.attendance_service.list_records(1), 5):
        print(record.to_dict())


if __name__ == "__main__":
    main()
