"""Create conversations/messages tables for DATABASE_URL. Run once on a fresh database."""
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from mentor_buddy.db.session import engine, init_db

init_db(engine)
print(f"Tables ready on {engine.url.render_as_string(hide_password=True)}")
