"""Development entry point: ``python app.py`` serves the JSON API on port 5000."""

import os

from src.workforce.workforce.main import create_app

app = create_app()


if __name__ == "__main__":
    app.run(host=os.getenv("HOST", "127.0.0.1"), port=int(os.getenv("PORT", "5000")), debug=app.config["DEBUG"])
