import os

basedir = os.path.abspath(os.path.dirname(__file__))

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev-key')

    # Own variable first, then the one hosting platforms set
    uri = os.environ.get('OMBOR_DATABASE_URL') or os.environ.get('DATABASE_URL')

    if uri and uri.startswith('postgresql://'):
        uri = uri.replace('postgresql://', 'postgresql+psycopg://', 1)

    SQLALCHEMY_DATABASE_URI = uri or f"sqlite:///{os.path.join(basedir, 'instance', 'ombor.db')}"
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Warehouse settings
    LOW_STOCK_THRESHOLD = int(os.environ.get('LOW_STOCK_THRESHOLD', 10))
    RECENT_TRANSACTIONS_LIMIT = int(os.environ.get('RECENT_TRANSACTIONS_LIMIT', 10))
    DEFAULT_ACTOR = os.environ.get('DEFAULT_ACTOR', 'System')

    # Seed administrator (created when the users table is empty)
    ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD', '123')
