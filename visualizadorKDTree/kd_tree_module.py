#KD-Tree 2D balanceado (mediana inferior) para la reproducción paso a paso.
from typing import List, Tuple, Optional, Iterator, Sequence
import logging

logger = logging.getLogger(__name__)

# -------------------------------
# Alias de tipos
# -------------------------------
Point = Tuple[float, float]                   # (x, y)
PuntoIndexado = Tuple[Point, int]             # (punto, posición en la entrada)


# ============================================================
# NODO KD
# ============================================================
class Node:
    __slots__ = ("point", "axis", "left", "right", "label",
                 "add_step_index", "split_step_index")

    def __init__(self, point: Point, axis: int,
                 left: Optional["Node"] = None, right: Optional["Node"] = None):
        self.point: Point = point
        self.axis: int = axis   # 0 = x, 1 = y
        self.left: Optional["Node"] = left
        self.right: Optional["Node"] = right
        self.label: str = ""             # "P1", "P2", ... (preorden)
        self.add_step_index: int = -1    # lo asigna linearize()
        self.split_step_index: int = -1

    def __repr__(self):
        return f"Node({self.label or '?'}, point={self.point}, axis={self.axis})"


# Árbol = raíz o None si la entrada estaba vacía
Tree = Optional[Node]


# ----------------------------------------------------------
# Orden total de los puntos
# ----------------------------------------------------------
def _clave_orden(eje: int):
    """
    Clave de ordenamiento para un eje: primero la coordenada del eje,
    luego la del otro eje y, para puntos idénticos, la posición original
    en la entrada.
    """
    otro = (eje + 1) % 2

    def clave(item: PuntoIndexado):
        punto, posicion = item
        return (punto[eje], punto[otro], posicion)

    return clave


def median_index(n: int) -> int:
    """Mediana inferior de una secuencia ordenada de largo n."""
    return (n - 1) // 2


# ----------------------------------------------------------
# Construcción del árbol
# ----------------------------------------------------------
def build(points: Sequence[Sequence[float]]) -> Tree:
    """
    Construye el KD-Tree desde una secuencia de puntos (x, y).

    La lista del llamador no se modifica: se ordenan copias locales.
    Una entrada vacía produce el árbol vacío (None).
    """

    def construir_rec(lista: List[PuntoIndexado], profundidad: int) -> Tree:
        if not lista:
            return None

        eje = profundidad % 2
        lista.sort(key=_clave_orden(eje))
        mid = median_index(len(lista))

        return Node(
            lista[mid][0],
            eje,
            left=construir_rec(lista[:mid], profundidad + 1),
            right=construir_rec(lista[mid + 1:], profundidad + 1),
        )

    indexados = [((p[0], p[1]), i) for i, p in enumerate(points)]
    raiz = construir_rec(indexados, 0)
    logger.debug("KD-Tree construido con %d puntos", len(indexados))
    return raiz


# ----------------------------------------------------------
# Etiquetas en preorden
# ----------------------------------------------------------
def assign_labels(tree: Tree) -> int:
    """Asigna "P1", "P2", ... en preorden (nodo, izq, der). Retorna el total."""

    def rec(nodo: Tree, contador: int) -> int:
        if nodo is None:
            return contador
        contador += 1
        nodo.label = f"P{contador}"
        contador = rec(nodo.left, contador)
        return rec(nodo.right, contador)

    return rec(tree, 0)


# ----------------------------------------------------------
# Recorridos
# ----------------------------------------------------------
def iter_preorder(tree: Tree) -> Iterator[Node]:
    if tree is None:
        return
    yield tree
    yield from iter_preorder(tree.left)
    yield from iter_preorder(tree.right)


def count_nodes(tree: Tree) -> int:
    return sum(1 for _ in iter_preorder(tree))


def height(tree: Tree) -> int:
    """Cantidad de niveles; 0 para el árbol vacío."""
    if tree is None:
        return 0
    return 1 + max(height(tree.left), height(tree.right))


def shape(tree: Tree):
    """Forma estructural (punto, eje, izq, der) anidada, útil para comparar árboles."""
    if tree is None:
        return None
    return (tree.point, tree.axis, shape(tree.left), shape(tree.right))


# ============================================================
# KD-TREE
# ============================================================
class KDTree:
    def __init__(self):
        self.raiz: Tree = None
        self.tamano: int = 0

    def construir(self, puntos: Sequence[Sequence[float]]) -> None:
        """Construye y etiqueta el árbol; reemplaza cualquier árbol anterior."""
        self.raiz = build(puntos)
        self.tamano = assign_labels(self.raiz)

    def altura(self) -> int:
        return height(self.raiz)

    def todos_los_puntos(self) -> List[Point]:
        return [nodo.point for nodo in iter_preorder(self.raiz)]
