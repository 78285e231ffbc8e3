"""
Constantes de la aplicación.
"""
import os

# Ruta del dataset de ejemplo (válida en local y en Streamlit Cloud)
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
DATA_LOCAL_PATH = os.path.join(BASE_DIR, "data", "ejemplo_puntos.csv")


def ruta_dataset() -> str:
    """
    Copia incluida junto a los módulos; si no existe (instalación no editable),
    intenta data/ relativo al directorio actual.
    """
    if os.path.exists(DATA_LOCAL_PATH):
        return DATA_LOCAL_PATH
    return os.path.join("data", "ejemplo_puntos.csv")

# Margen relativo agregado a cada lado de la caja de los puntos
MARGEN_RELATIVO = 0.1
# Ancho usado cuando todos los puntos comparten una coordenada
SPAN_MINIMO = 1.0
# ... y fracción de la magnitud cuando 1.0 no alcanza (|v| > ~1e15)
SPAN_MINIMO_RELATIVO = 1e-9

PUNTOS_EJEMPLO = "\n".join([
    "3 2",
    "5 8",
    "6 1",
    "4 4",
    "9 0",
    "1 1",
    "2 2",
    "8 7",
])

# --------------------------
# Dibujo
# --------------------------
COLOR_PUNTO = "black"
COLOR_RESALTADO = "orange"
COLOR_ETIQUETA = "blue"
COLOR_DIVISION_X = "red"
COLOR_DIVISION_Y = "blue"
COLOR_MARCO = "#aaaaaa"
COLOR_NODO_REVELADO = "orange"
COLOR_NODO_OCULTO = "#ffffff"

RADIO_PUNTO = 4
GROSOR_DIVISION = 1.5
GROSOR_DIVISION_RESALTADA = 3

ALTO_PLANO = 600
ANCHO_PLANO = 900
