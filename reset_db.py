# reset_db.py

from app import create_app
from extensions import db
from modules.users.services import get_users

app = create_app()

with app.app_context():
    print("⚠️ All tables will be dropped...")
    db.drop_all()
    print("🧹 Tables dropped.")
    db.create_all()
    get_users()
    print("✅ Database recreated, default administrator seeded.")
