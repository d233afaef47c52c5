import os

from dotenv import load_dotenv

load_dotenv()

current_directory = os.path.dirname(os.path.abspath(__file__))

TEMP_FOLDER = os.getenv("TEMP_FOLDER", os.path.join(current_directory, "tmp"))
UPLOAD_FOLDER = os.path.join(TEMP_FOLDER, "uploads")
DATABASE_PATH = os.getenv("DATABASE_PATH", os.path.join(TEMP_FOLDER, "documents.db"))

PORT = int(os.getenv("PORT", 5000))
HOST = os.getenv("HOST", None)
DEBUG = os.getenv("DEBUG", "false").lower() == "true"
