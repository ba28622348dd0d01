# --------------------------------------------------------------
# File: 1_Lista_negra.py
# Description: Administración y consulta de la lista negra de claves en Streamlit.
# --------------------------------------------------------------

import streamlit as st

from api import services

# La página puede abrirse directamente: valida el entorno igual que Home.
services.bootstrap()

# Presenta el título general de la página.
st.title("🗂️ Lista negra")

tab_add, tab_import, tab_check, tab_list = st.tabs(
    ["Añadir clave", "Importar huellas", "Comprobar", "Entradas"]
)

# Alta de una clave pública concreta.
with tab_add:
    pem = st.text_area("Clave pública (PEM)", key="add_pem", height=200)
    if st.button("Añadir a la lista negra", disabled=not pem, key="btn_add"):
        ok, msg, dbg = services.add_public_key(pem)
        if ok:
            st.success(msg)
            st.code(dbg)
        else:
            st.error(msg)

# Importación en bloque de huellas ya calculadas.
with tab_import:
    keyspec = st.text_input("Keyspec por defecto", key="imp_keyspec", help="Por ejemplo RSA2048 o secp256r1.")
    f = st.file_uploader("Fichero de huellas (una por línea)", type=["txt"])
    if f and st.button("Importar", key="btn_import"):
        lines = f.read().decode("utf-8", errors="replace").splitlines()
        ok, msg, dbg = services.import_fingerprints(lines, keyspec=keyspec)
        (st.success if ok else st.warning)(msg)
        st.code(dbg)

# Comprobación de claves o certificados candidatos.
with tab_check:
    mode = st.radio("Entrada", ["Clave pública", "Certificado"], horizontal=True)
    data = st.text_area("Contenido PEM", key="chk_pem", height=200)
    if st.button("Comprobar", disabled=not data, key="btn_check"):
        if mode == "Certificado":
            ok, msg, dbg = services.check_certificate(data.encode("utf-8"))
        else:
            ok, msg, dbg = services.check_public_key(data)
        (st.success if ok else st.error)(msg)
        if dbg:
            st.code(dbg)

# Listado y borrado de entradas.
with tab_list:
    entries = services.list_entries()
    if not entries:
        st.info("La lista negra está vacía.")
    else:
        st.dataframe(entries, use_container_width=True)
        entry_id = st.number_input("ID a eliminar", min_value=1, step=1, key="del_id")
        if st.button("Eliminar", key="btn_delete"):
            ok, msg = services.remove_entry(int(entry_id))
            (st.success if ok else st.error)(msg)
