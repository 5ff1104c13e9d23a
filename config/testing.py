SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": "localhost",
    "port": 3306,
    "user": "root",
    "password": "",
    "database": "travel_desk_test",
}

DEBUG = False
TESTING = True

SESSION_DAYS = 1

AUTO_INIT_DB = False

BOOTSTRAP_ADMIN = {
    "user_id": "admin",
    "password": "123",
    "name": "Admin",
    "department": "Administration",
}
