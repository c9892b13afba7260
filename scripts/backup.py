"""Back up the tracker's data.

JSON backend: the collection files in DATA_DIR are zipped.
MySQL backend: `mysqldump` is used (it must be installed).
"""

from __future__ import annotations

import importlib
import subprocess
import sys
import zipfile
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.lecture_tracker.lecture_tracker.core.constants import (
    LECTURES_FILE,
    SCHEDULES_FILE,
    SUBJECTS_FILE,
    TASKS_FILE,
)


def backup_json(data_dir: Path, out_dir: Path, ts: str) -> Path:
    out_file = out_dir / f"lecture_tracker_{ts}.zip"
    with zipfile.ZipFile(out_file, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for name in (SUBJECTS_FILE, LECTURES_FILE, SCHEDULES_FILE, TASKS_FILE):
            path = data_dir / name
            if path.exists():
                zf.write(path, arcname=name)
    return out_file


def backup_mysql(db: dict, out_dir: Path, ts: str) -> Path:
    out_file = out_dir / f"{db['database']}_{ts}.sql"
    cmd = [
        "mysqldump",
        f"-h{db['host']}",
        f"-P{db.get('port', 3306)}",
        f"-u{db['user']}",
        f"-p{db['password']}",
        db["database"],
    ]
    try:
        with out_file.open("wb") as f:
            subprocess.run(cmd, stdout=f, stderr=subprocess.PIPE, check=True)
    except FileNotFoundError:
        out_file.unlink(missing_ok=True)
        raise SystemExit("`mysqldump` not found. Install the MySQL client tools first.")
    return out_file


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    backend = str(getattr(settings, "STORAGE_BACKEND", "json")).lower()

    out_dir = REPO_ROOT / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")

    if backend == "mysql":
        out_file = backup_mysql(settings.DB_CONFIG, out_dir, ts)
    else:
        data_dir = getattr(settings, "DATA_DIR", None)
        if not data_dir:
            raise SystemExit("DATA_DIR is not set; nothing to back up.")
        out_file = backup_json(Path(data_dir), out_dir, ts)

    print(f"OK: Backup created: {out_file}")


if __name__ == "__main__":
    main()
