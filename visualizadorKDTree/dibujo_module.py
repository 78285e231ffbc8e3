"""
Dibujo de la traza:
- plano 2D con folium (CRS "Simple", sin teselas): puntos, líneas de división
  y la región de cada paso
- árbol jerárquico como texto DOT para st.graphviz_chart
"""
from typing import List, Tuple, Iterable
import folium
import pandas as pd

import configuracion as cfg
from kd_tree_module import Node, Tree, iter_preorder
from traza_module import Step, Trace, POINT_ADDED, SPLIT_DRAWN

Rango = Tuple[float, float]


# -------------------------------------------------------------
# Funciones auxiliares
# -------------------------------------------------------------
def formato_numero(v: float) -> str:
    return f"{v:g}"


def etiqueta_nodo(nodo: Node) -> str:
    """Texto "P1 (x, y)" del nodo."""
    x, y = nodo.point
    return f"{nodo.label} ({formato_numero(x)}, {formato_numero(y)})"


def a_leaflet(x: float, y: float) -> List[float]:
    """Leaflet espera [lat, lng]; en el CRS simple eso es [y, x]."""
    return [y, x]


def limites_leaflet(rango_x: Rango, rango_y: Rango) -> List[List[float]]:
    return [a_leaflet(rango_x[0], rango_y[0]), a_leaflet(rango_x[1], rango_y[1])]


def segmento_division(paso: Step) -> Tuple[Tuple[float, float], Tuple[float, float]]:
    """Extremos (x, y) de la línea de división, acotada al rectángulo del paso."""
    x, y = paso.node.point
    if paso.node.axis == 0:
        return (x, paso.y_range[0]), (x, paso.y_range[1])
    return (paso.x_range[0], y), (paso.x_range[1], y)


# -------------------------------------------------------------
# Plano 2D
# -------------------------------------------------------------
def crear_plano(rango_x: Rango, rango_y: Rango) -> folium.Map:
    """Mapa vacío con el marco del rectángulo inicial."""
    centro = a_leaflet((rango_x[0] + rango_x[1]) / 2, (rango_y[0] + rango_y[1]) / 2)
    m = folium.Map(
        location=centro,
        zoom_start=0,
        crs="Simple",
        tiles=None,
        min_zoom=-10,
        max_zoom=30,
        control_scale=False,
    )
    folium.Rectangle(
        bounds=limites_leaflet(rango_x, rango_y),
        color=cfg.COLOR_MARCO,
        weight=1,
        fill=False,
    ).add_to(m)
    m.fit_bounds(limites_leaflet(rango_x, rango_y))
    return m


def dibujar_punto(m: folium.Map, paso: Step, resaltado: bool) -> None:
    x, y = paso.node.point
    color = cfg.COLOR_RESALTADO if resaltado else cfg.COLOR_PUNTO
    folium.CircleMarker(
        location=a_leaflet(x, y),
        radius=cfg.RADIO_PUNTO,
        color=color,
        fill=True,
        fill_color=color,
        fill_opacity=1.0,
        tooltip=etiqueta_nodo(paso.node),
    ).add_to(m)

    # etiqueta de texto al lado del punto
    folium.Marker(
        location=a_leaflet(x, y),
        icon=folium.DivIcon(
            icon_size=(150, 16),
            icon_anchor=(-6, 16),
            html=(f'<div style="font-size:12px;color:{cfg.COLOR_ETIQUETA};'
                  f'white-space:nowrap">{etiqueta_nodo(paso.node)}</div>'),
        ),
    ).add_to(m)


def dibujar_division(m: folium.Map, paso: Step, resaltado: bool) -> None:
    por_x = paso.node.axis == 0
    color = cfg.COLOR_DIVISION_X if por_x else cfg.COLOR_DIVISION_Y
    inicio, fin = segmento_division(paso)

    folium.PolyLine(
        [a_leaflet(*inicio), a_leaflet(*fin)],
        color=color,
        weight=cfg.GROSOR_DIVISION_RESALTADA if resaltado else cfg.GROSOR_DIVISION,
        dash_array="5, 5",
    ).add_to(m)

    # región que cubre el subárbol del nodo
    folium.Rectangle(
        bounds=limites_leaflet(paso.x_range, paso.y_range),
        color=color,
        opacity=0.5,
        weight=1,
        dash_array="2, 2",
        fill=False,
    ).add_to(m)


def dibujar_paso(m: folium.Map, paso: Step, resaltado: bool = False) -> None:
    if paso.kind == POINT_ADDED:
        dibujar_punto(m, paso, resaltado)
    elif paso.kind == SPLIT_DRAWN:
        dibujar_division(m, paso, resaltado)
    else:
        raise ValueError(f"Tipo de paso desconocido: {paso.kind!r}")


def dibujar_pasos(m: folium.Map, pasos: Iterable[Tuple[Step, bool]]) -> folium.Map:
    """Dibuja pares (paso, resaltado), p.ej. Reproductor.pasos_visibles()."""
    for paso, resaltado in pasos:
        dibujar_paso(m, paso, resaltado)
    return m


# -------------------------------------------------------------
# Árbol jerárquico
# -------------------------------------------------------------
def arbol_dot(raiz: Tree, cursor: int = 0) -> str:
    """
    DOT del árbol. Los nodos con add_step_index < cursor se pintan como
    revelados; un hijo ausente con hermano presente se deja invisible para
    conservar la posición izquierda/derecha.
    """
    lineas = [
        "digraph KDTree {",
        '  node [shape=ellipse, style=filled, fontsize=10];',
    ]
    nombres = {id(nodo): f"n{i}" for i, nodo in enumerate(iter_preorder(raiz))}

    for nodo in iter_preorder(raiz):
        nombre = nombres[id(nodo)]
        revelado = 0 <= nodo.add_step_index < cursor
        color = cfg.COLOR_NODO_REVELADO if revelado else cfg.COLOR_NODO_OCULTO
        lineas.append(f'  {nombre} [label="{etiqueta_nodo(nodo)}", fillcolor="{color}"];')

        if nodo.left is None and nodo.right is None:
            continue
        for lado, hijo in (("izq", nodo.left), ("der", nodo.right)):
            if hijo is None:
                vacio = f"{nombre}_{lado}"
                lineas.append(f'  {vacio} [label="", style=invis];')
                lineas.append(f"  {nombre} -> {vacio} [style=invis];")
            else:
                lineas.append(f"  {nombre} -> {nombres[id(hijo)]};")

    lineas.append("}")
    return "\n".join(lineas)


# -------------------------------------------------------------
# Tabla de pasos
# -------------------------------------------------------------
def tabla_pasos(traza: Trace) -> pd.DataFrame:
    filas = []
    for paso in traza:
        filas.append({
            "paso": paso.index,
            "tipo": paso.kind,
            "nodo": etiqueta_nodo(paso.node),
            "eje": "x" if paso.node.axis == 0 else "y",
            "x_min": paso.x_range[0],
            "x_max": paso.x_range[1],
            "y_min": paso.y_range[0],
            "y_max": paso.y_range[1],
        })
    columnas = ["paso", "tipo", "nodo", "eje", "x_min", "x_max", "y_min", "y_max"]
    return pd.DataFrame(filas, columns=columnas)
