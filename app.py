"""
Outline Loop - edit a Markdown document's heading outline and write it back.
"""

import os
import logging

from flask import Flask
from flask_cors import CORS

from config import log_event, PROJECTS_DIR, SETTINGS_FILE
from routes import api
from services.processing import get_settings


def create_app() -> Flask:
    app = Flask(__name__)
    CORS(app)
    app.register_blueprint(api)
    return app


app = create_app()


if __name__ == '__main__':
    port = int(os.getenv("PORT", 5050))
    settings = get_settings()
    log_event(
        logging.INFO,
        "server_startup",
        ai_enabled=settings.ai_enabled,
        model=settings.model,
        projects_dir=str(PROJECTS_DIR),
        settings_file=str(SETTINGS_FILE),
        port=port,
    )

    print(f"""
    ╔═══════════════════════════════════════════════════╗
    ║              OUTLINE LOOP                         ║
    ╠═══════════════════════════════════════════════════╣
    ║   AI Enhance:  {'Ready' if settings.ai_enabled else 'No API Key':<35}║
    ║   Model:       {settings.model:<35}║
    ╠═══════════════════════════════════════════════════╣
    ║   Server: http://localhost:{port:<23}║
    ╚═══════════════════════════════════════════════════╝
    """)
    app.run(debug=True, port=port, threaded=True)
