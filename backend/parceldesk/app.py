import logging

from parceldesk.core.config import PORT
from parceldesk.db.session import create_tables
from parceldesk.main import create_app

logger = logging.getLogger(__name__)

# Create Flask app
app = create_app()

if __name__ == "__main__":
    # Create tables on startup
    create_tables()
    logger.info("Database tables created successfully")

    app.run(host="0.0.0.0", port=PORT, debug=True)
