import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables (only in development)
# In containers, environment variables are set directly
if os.getenv("ENVIRONMENT") != "production":
    load_dotenv()

BASE_DIR = Path(__file__).resolve().parent.parent.parent

ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

# Filesystem configuration
FILESYSTEM_TYPE = os.getenv("FILESYSTEM_TYPE", "local")  # Options: 'local', 'memory'

# Base directory of the local filesystem adapter
PROJECTS_BASE_DIR_STR = os.getenv("PROJECTS_BASE_DIR", str(BASE_DIR / "data"))
PROJECTS_BASE_DIR = Path(PROJECTS_BASE_DIR_STR)

# Root directory holding folders and projects, relative to the base directory
PROJECTS_ROOT = os.getenv("PROJECTS_ROOT", "buza-projects")

# Tree document store configuration
TREE_STORE_TYPE = os.getenv("TREE_STORE_TYPE", "json")  # Options: 'json', 'memory'
TREE_DB_PATH = Path(os.getenv("TREE_DB_PATH", str(BASE_DIR / "data" / "folder_tree.json")))

# CORS
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173").split(",")
    if origin.strip()
]
