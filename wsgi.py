# wsgi.py
import sys
from pathlib import Path

# make the project root importable when launched from elsewhere (gunicorn --chdir, IIS, ...)
ROOT = Path(__file__).resolve().parent
sys.path.insert(0, str(ROOT))

from app import create_app  # noqa: E402

app = create_app()
