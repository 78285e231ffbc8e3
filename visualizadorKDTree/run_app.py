"""
Aplicación KD-Tree paso a paso.
"""
import streamlit as st
import pandas as pd
from streamlit_folium import st_folium
import sys, os, time
import logging

# Asegurar que los módulos se importen desde la raíz del proyecto
sys.path.append(os.path.abspath(os.path.dirname(__file__)))

import configuracion as cfg
from kd_tree_module import KDTree
from traza_module import linearize, Reproductor, InvalidRangeError, POINT_ADDED
from entrada_module import parse_points, leer_csv, caja_con_margen
from dibujo_module import crear_plano, dibujar_pasos, arbol_dot, tabla_pasos, etiqueta_nodo

logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger("run_app")

# --------------------------
# Inicializar session_state
# --------------------------
if "kd" not in st.session_state:
    st.session_state.kd = None          # KDTree construido

if "traza" not in st.session_state:
    st.session_state.traza = ()         # tuple de Step

if "caja" not in st.session_state:
    st.session_state.caja = None        # (rango_x, rango_y)

if "cursor" not in st.session_state:
    st.session_state.cursor = 0

if "tiempo_build" not in st.session_state:
    st.session_state.tiempo_build = 0.0

# --------------------------
# Configuración de la app
# --------------------------
st.set_page_config(layout="wide", page_title="KD-Tree paso a paso")
st.title("🌳 KD-Tree — construcción paso a paso")

st.write("Ingresa puntos, construye el árbol y recorre su construcción paso a paso.")

# --------------------------
# Menú lateral: datos
# --------------------------
st.sidebar.title("Datos")
modo_carga = st.sidebar.radio("Fuente de datos:", ("Escribir puntos", "Subir CSV", "Dataset de ejemplo"))
margen = st.sidebar.number_input("Margen de la caja (fracción)", min_value=0.0, max_value=2.0,
                                 value=cfg.MARGEN_RELATIVO, step=0.05)


def construir(puntos):
    """Reemplaza árbol y traza por los de la nueva entrada."""
    t0 = time.time()
    kd = KDTree()
    kd.construir(puntos)
    rango_x, rango_y = caja_con_margen(puntos, margen)
    traza = linearize(kd.raiz, rango_x, rango_y)
    tiempo = time.time() - t0

    st.session_state.kd = kd
    st.session_state.traza = traza
    st.session_state.caja = (rango_x, rango_y)
    st.session_state.cursor = 0
    st.session_state.tiempo_build = tiempo
    logger.info("KD-Tree: %d puntos, %d pasos, %.6f s", kd.tamano, len(traza), tiempo)


puntos = None
if modo_carga == "Escribir puntos":
    with st.form("form_puntos"):
        texto = st.text_area("Puntos (uno por línea: x y)", value=cfg.PUNTOS_EJEMPLO, height=200)
        enviado = st.form_submit_button("Construir KD-Tree")
    if enviado:
        if not texto.strip():
            st.warning("Ingresa algunos puntos.")
            st.stop()
        puntos = parse_points(texto)
        if not puntos:
            st.warning("No se encontraron puntos válidos. Revisa la entrada.")
            st.stop()

elif modo_carga == "Subir CSV":
    archivo = st.sidebar.file_uploader("Sube CSV (x, y)", type=["csv", "txt"])
    if archivo is not None and st.sidebar.button("Construir KD-Tree"):
        puntos = leer_csv(archivo)
        if not puntos:
            st.warning("El archivo no tiene puntos válidos.")
            st.stop()

else:
    if st.sidebar.button("Construir KD-Tree"):
        ruta = cfg.ruta_dataset()
        if not os.path.exists(ruta):
            st.warning("No se encontró el dataset de ejemplo (instala con `pip install -e .`).")
            st.stop()
        puntos = leer_csv(ruta)

if puntos:
    try:
        construir(puntos)
    except InvalidRangeError as e:
        st.error(str(e))
        st.stop()

kd = st.session_state.kd
traza = st.session_state.traza

if kd is None:
    st.info("Construye un KD-Tree para comenzar.")
    st.stop()

# vista previa
with st.expander("Vista previa de datos"):
    st.dataframe(pd.DataFrame(kd.todos_los_puntos(), columns=["x", "y"]).head(20))

# --------------------------
# Métricas
# --------------------------
st.subheader("KD-Tree — Métricas")
col1, col2, col3, col4 = st.columns(4)
col1.metric("Puntos", kd.tamano)
col2.metric("Altura", kd.altura())
col3.metric("Pasos", len(traza))
col4.metric("Tiempo construcción (s)", f"{st.session_state.tiempo_build:.6f}")

# --------------------------
# Reproducción
# --------------------------
def _ir_a(k):
    st.session_state.cursor = Reproductor(traza, k).cursor


def _avanzar():
    st.session_state.cursor = Reproductor(traza, st.session_state.cursor).siguiente()


def _retroceder():
    st.session_state.cursor = Reproductor(traza, st.session_state.cursor).anterior()


rep = Reproductor(traza, st.session_state.cursor)

b1, b2, b3, b4 = st.columns(4)
b1.button("⏮ Inicio", on_click=_ir_a, args=(0,), disabled=not rep.puede_retroceder)
b2.button("◀ Anterior", on_click=_retroceder, disabled=not rep.puede_retroceder)
b3.button("Siguiente ▶", on_click=_avanzar, disabled=not rep.puede_avanzar)
b4.button("Fin ⏭", on_click=_ir_a, args=(len(traza),), disabled=not rep.puede_avanzar)

actual = rep.paso_actual
if actual is None:
    st.write(f"Paso {rep.cursor}/{len(rep)} — construcción completa.")
elif actual.kind == POINT_ADDED:
    st.write(f"Paso {rep.cursor}/{len(rep)} — se agrega **{etiqueta_nodo(actual.node)}**")
else:
    eje = "x" if actual.node.axis == 0 else "y"
    st.write(f"Paso {rep.cursor}/{len(rep)} — división por **{eje}** en {etiqueta_nodo(actual.node)}")

tab_plano, tab_arbol, tab_pasos = st.tabs(["Partición 2D", "Árbol", "Pasos"])

with tab_plano:
    rango_x, rango_y = st.session_state.caja
    plano = crear_plano(rango_x, rango_y)
    dibujar_pasos(plano, rep.pasos_visibles())
    st_folium(plano, width=cfg.ANCHO_PLANO, height=cfg.ALTO_PLANO)

with tab_arbol:
    st.graphviz_chart(arbol_dot(kd.raiz, rep.cursor))

with tab_pasos:
    st.dataframe(tabla_pasos(traza))
