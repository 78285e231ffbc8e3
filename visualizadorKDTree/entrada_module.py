"""
Lectura de puntos (texto "x y" por línea o CSV) y caja inicial con margen.
"""
from typing import List, Tuple, Sequence
import logging
import math

import pandas as pd

from configuracion import MARGEN_RELATIVO, SPAN_MINIMO, SPAN_MINIMO_RELATIVO
from kd_tree_module import Point

logger = logging.getLogger(__name__)

Rango = Tuple[float, float]


def parse_points(texto: str) -> List[Point]:
    """
    Un punto por línea, dos números separados por espacios.
    Las líneas con otra cantidad de valores o con valores no numéricos se ignoran.
    """
    puntos: List[Point] = []
    for linea in (texto or "").strip().splitlines():
        partes = linea.split()
        if len(partes) != 2:
            continue
        try:
            x, y = float(partes[0]), float(partes[1])
        except ValueError:
            continue
        # float() acepta "nan" e "inf"
        if not (math.isfinite(x) and math.isfinite(y)):
            continue
        puntos.append((x, y))

    logger.info("Puntos leídos: %d", len(puntos))
    return puntos


def puntos_desde_dataframe(df: pd.DataFrame) -> List[Point]:
    """Usa las columnas x, y si existen; si no, las dos primeras."""
    df = df.copy()
    df.columns = [str(c).lower().strip() for c in df.columns]
    if "x" in df.columns and "y" in df.columns:
        df = df[["x", "y"]].copy()
    else:
        df = df.iloc[:, :2].copy()
        df.columns = ["x", "y"]

    df["x"] = pd.to_numeric(df["x"], errors="coerce")
    df["y"] = pd.to_numeric(df["y"], errors="coerce")
    df = df.dropna().reset_index(drop=True)
    return [(float(r.x), float(r.y)) for r in df.itertuples(index=False)]


def _rebobinar(archivo) -> None:
    if hasattr(archivo, "seek"):
        archivo.seek(0)


def _encabezado_numerico(df: pd.DataFrame) -> bool:
    """
    True si la primera fila se tomó como encabezado pero son números.
    Solo cuentan las columnas que se usan (x, y o las dos primeras).
    """
    nombres = [str(c).lower().strip() for c in df.columns]
    if "x" in nombres and "y" in nombres:
        return False
    for columna in nombres[:2]:
        for valor in columna.split():
            try:
                float(valor)
            except ValueError:
                return False
    return True


def leer_csv(archivo) -> List[Point]:
    """Lee un CSV (ruta o archivo subido) con columnas x, y, o sin encabezado."""
    # lectura robusta
    try:
        df = pd.read_csv(archivo)
    except pd.errors.EmptyDataError:
        return []
    except ValueError:
        _rebobinar(archivo)
        df = pd.read_csv(archivo, header=None, sep=None, engine="python")
    else:
        if _encabezado_numerico(df):
            _rebobinar(archivo)
            df = pd.read_csv(archivo, header=None)

    if df.shape[1] == 1:
        # valores separados por espacios dentro de una sola columna
        df = df.iloc[:, 0].astype(str).str.split(expand=True)
    if df.shape[1] < 2:
        return []
    return puntos_desde_dataframe(df)


def caja_con_margen(puntos: Sequence[Point], margen: float = MARGEN_RELATIVO) -> Tuple[Rango, Rango]:
    """
    Caja (rango_x, rango_y) de los puntos, agrandada `margen` veces el ancho
    a cada lado. Un ancho nulo se reemplaza por SPAN_MINIMO, o por una
    fracción de la magnitud del valor si SPAN_MINIMO se pierde al redondear.
    """
    if not puntos:
        raise ValueError("No hay puntos para calcular la caja")

    xs = [p[0] for p in puntos]
    ys = [p[1] for p in puntos]

    def rango(valores: List[float]) -> Rango:
        minimo, maximo = min(valores), max(valores)
        span = maximo - minimo
        if span <= 0:
            # caja centrada en el valor común
            mitad = max(SPAN_MINIMO, abs(minimo) * SPAN_MINIMO_RELATIVO) / 2
            return (minimo - mitad, maximo + mitad)
        return (minimo - margen * span, maximo + margen * span)

    return rango(xs), rango(ys)
