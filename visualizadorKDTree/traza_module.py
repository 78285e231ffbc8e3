"""
Traza de construcción del KD-Tree.
- linearize: recorre el árbol (nodo, izq, der) y emite dos pasos por nodo
  ("point-added" y "split-drawn") con el rectángulo activo en ese nodo
- Reproductor: cursor de reproducción adelante/atrás sobre la traza
"""
from dataclasses import dataclass
from typing import List, Tuple, Optional
import logging

from kd_tree_module import Node, Tree

logger = logging.getLogger(__name__)

Rango = Tuple[float, float]   # (min, max)

POINT_ADDED = "point-added"
SPLIT_DRAWN = "split-drawn"


class InvalidRangeError(ValueError):
    """El rectángulo inicial no cumple min < max en algún eje."""


@dataclass(frozen=True)
class Step:
    kind: str
    node: Node          # referencia de solo lectura, el árbol es del llamador
    x_range: Rango
    y_range: Rango
    index: int


Trace = Tuple[Step, ...]


def _validar_rango(nombre: str, rango: Rango) -> Rango:
    minimo, maximo = rango
    # "not <" también rechaza NaN
    if not (minimo < maximo):
        raise InvalidRangeError(
            f"Rango {nombre} inválido: [{minimo}, {maximo}] (se requiere min < max)"
        )
    return (minimo, maximo)


# ----------------------------------------------------------
# Linearización
# ----------------------------------------------------------
def linearize(tree: Tree, x_range: Rango, y_range: Rango) -> Trace:
    """
    Retorna la traza de construcción del árbol.

    Cada nodo emite primero "point-added" y luego "split-drawn", ambos con el
    rectángulo que cubre su subárbol; después se recorre el hijo izquierdo y
    luego el derecho con el rectángulo recortado por el punto del nodo.
    Los índices de paso quedan anotados en cada nodo.
    """
    x_range = _validar_rango("x", x_range)
    y_range = _validar_rango("y", y_range)

    pasos: List[Step] = []

    def rec(nodo: Tree, rx: Rango, ry: Rango):
        if nodo is None:
            return

        nodo.add_step_index = len(pasos)
        pasos.append(Step(POINT_ADDED, nodo, rx, ry, nodo.add_step_index))
        nodo.split_step_index = len(pasos)
        pasos.append(Step(SPLIT_DRAWN, nodo, rx, ry, nodo.split_step_index))

        if nodo.axis == 0:   # división por x
            x = nodo.point[0]
            rec(nodo.left, (rx[0], x), ry)
            rec(nodo.right, (x, rx[1]), ry)
        else:                # división por y
            y = nodo.point[1]
            rec(nodo.left, rx, (ry[0], y))
            rec(nodo.right, rx, (y, ry[1]))

    rec(tree, x_range, y_range)
    logger.debug("Traza generada: %d pasos", len(pasos))
    return tuple(pasos)


# ============================================================
# REPRODUCTOR
# ============================================================
class Reproductor:
    """Cursor sobre la traza, acotado a [0, len(traza)]."""

    def __init__(self, traza: Trace, cursor: int = 0):
        self.traza = traza
        self.cursor = 0
        self.ir_a(cursor)

    def __len__(self):
        return len(self.traza)

    @property
    def puede_avanzar(self) -> bool:
        return self.cursor < len(self.traza)

    @property
    def puede_retroceder(self) -> bool:
        return self.cursor > 0

    def ir_a(self, k: int) -> int:
        self.cursor = max(0, min(int(k), len(self.traza)))
        return self.cursor

    def siguiente(self) -> int:
        if self.puede_avanzar:
            self.cursor += 1
        return self.cursor

    def anterior(self) -> int:
        if self.puede_retroceder:
            self.cursor -= 1
        return self.cursor

    @property
    def paso_actual(self) -> Optional[Step]:
        """Paso resaltado; None cuando la traza ya terminó."""
        if self.cursor < len(self.traza):
            return self.traza[self.cursor]
        return None

    def pasos_visibles(self) -> List[Tuple[Step, bool]]:
        """(paso, resaltado) para los pasos 0..cursor."""
        visibles = [(p, False) for p in self.traza[:self.cursor]]
        actual = self.paso_actual
        if actual is not None:
            visibles.append((actual, True))
        return visibles

    def revelado(self, nodo: Node) -> bool:
        return 0 <= nodo.add_step_index < self.cursor
