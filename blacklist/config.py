# --------------------------------------------------------------
# File: config.py
# Description: Parámetros de entorno para la lista negra de claves públicas.
# --------------------------------------------------------------

import os

from dotenv import load_dotenv

load_dotenv()

# Directorio base de persistencia, compartido con la capa de servicios.
DATA_DIR = os.getenv("STORAGE_PATH", "./_data")
BLACKLIST_PATH = os.getenv("BLACKLIST_PATH", os.path.join(DATA_DIR, "blacklist.json"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FILE = os.getenv("LOG_FILE") or None

# Algoritmo de huella; las huellas almacenadas dependen de él.
DIGEST_ALGORITHM = "SHA-256"
