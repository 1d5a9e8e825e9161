import os
from dotenv import load_dotenv

load_dotenv()

db_backend = os.getenv("DB_BACKEND", "postgres")
user = os.getenv("DB_USER", "postgres")
password = os.getenv("DB_PASSWORD", "postgres")
host = os.getenv("DB_HOST", "localhost")
port = os.getenv("DB_PORT", "5432")
db_name = os.getenv("DB_NAME", "shop")
sqlite_path = os.getenv("SQLITE_PATH", "")

offers_directory = os.getenv("OFFERS_DIRECTORY", "JsonData/Offers")
# 0 disables the periodic reload; the catalog is still loaded once at startup.
catalog_reload_minutes = int(os.getenv("CATALOG_RELOAD_MINUTES", "0"))
apply_timeout_seconds = float(os.getenv("APPLY_TIMEOUT_SECONDS", "0"))
user_id_header = os.getenv("USER_ID_HEADER", "userid")
log_level = os.getenv("LOG_LEVEL", "INFO")

if __name__ == "__main__":
    print(db_backend, user, host, port, db_name, offers_directory)
