"""
Swadaya ledger – development server entry point.

    python run.py
    flask --app run billing generate --period 2024-03
"""
import os

from swadaya import create_app

app = create_app(os.environ.get("FLASK_CONFIG", "default"))

if __name__ == "__main__":
    app.run(
        host=os.environ.get("FLASK_RUN_HOST", "127.0.0.1"),
        port=int(os.environ.get("FLASK_RUN_PORT", "5000")),
    )
