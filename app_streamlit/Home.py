# --------------------------------------------------------------
# File: Home.py
# Description: Define la página principal de Streamlit y valida el entorno.
# --------------------------------------------------------------

import streamlit as st

from api.services import bootstrap

# Configura los metadatos de la página principal de la aplicación.
st.set_page_config(page_title="Key Blacklist", page_icon="🛑", layout="centered")

# Sin SHA-256 no se puede calcular ninguna huella: la aplicación no arranca.
bootstrap()

# Presenta el nombre del producto y su propósito general.
st.title("🛑 Key Blacklist")
st.write("Lista negra de claves públicas débiles: huellas SHA-256 del módulo RSA o de la clave codificada.")
st.info("Ve a **Lista negra** para añadir claves, importar huellas o comprobar una clave.")
