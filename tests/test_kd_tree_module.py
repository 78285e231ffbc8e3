"""
Tests de construcción del KD-Tree
"""
import random

import pytest

from kd_tree_module import (KDTree, Node, build, assign_labels, iter_preorder,
                            count_nodes, height, median_index, shape)


EJEMPLO = [(3, 2), (5, 8), (6, 1), (4, 4), (9, 0), (1, 1), (2, 2), (8, 7)]


def puntos_aleatorios(n, semilla=123):
    rnd = random.Random(semilla)
    return [(rnd.uniform(0, 100), rnd.uniform(0, 100)) for _ in range(n)]


def test_empty_input_gives_empty_tree():
    assert build([]) is None
    assert count_nodes(None) == 0
    assert height(None) == 0
    assert assign_labels(None) == 0


def test_single_point():
    raiz = build([(7, 3)])
    assert raiz.point == (7, 3)
    assert raiz.axis == 0
    assert raiz.left is None and raiz.right is None


@pytest.mark.parametrize("n, esperado", [(1, 0), (2, 0), (3, 1), (4, 1), (7, 3), (8, 3)])
def test_median_index(n, esperado):
    assert median_index(n) == esperado


def test_median_of_three_diagonal_points():
    raiz = build([(1, 1), (2, 2), (3, 3)])
    assert raiz.point == (2, 2)
    assert raiz.left.point == (1, 1)
    assert raiz.right.point == (3, 3)


def test_example_tree_shape():
    raiz = build(EJEMPLO)
    assert raiz.point == (4, 4)
    assert raiz.axis == 0

    # izquierda: x < 4, ordenados por y (empate y=2 resuelto por x)
    assert raiz.left.point == (2, 2)
    assert raiz.left.left.point == (1, 1)
    assert raiz.left.right.point == (3, 2)

    # derecha: x > 4, ordenados por y
    assert raiz.right.point == (6, 1)
    assert raiz.right.left.point == (9, 0)
    assert raiz.right.right.point == (5, 8)
    assert raiz.right.right.left is None
    assert raiz.right.right.right.point == (8, 7)

    assert count_nodes(raiz) == 8
    assert height(raiz) == 4


def test_tie_break_uses_other_axis():
    # mismo x; el orden lo decide y
    raiz = build([(5, 9), (5, 1), (5, 5)])
    assert raiz.point == (5, 5)
    assert raiz.left.point == (5, 1)
    assert raiz.right.point == (5, 9)


def test_duplicates_are_accepted():
    puntos = [(1, 1)] * 7 + [(2, 2)]
    raiz = build(puntos)
    assert count_nodes(raiz) == len(puntos)
    assert sorted(n.point for n in iter_preorder(raiz)) == sorted(puntos)


def test_axis_cycles_with_depth():
    raiz = build(puntos_aleatorios(50))
    assert raiz.axis == 0
    for nodo in iter_preorder(raiz):
        for hijo in (nodo.left, nodo.right):
            if hijo is not None:
                assert hijo.axis == 1 - nodo.axis


def test_lower_median_at_every_node():
    raiz = build(puntos_aleatorios(37))
    for nodo in iter_preorder(raiz):
        n = count_nodes(nodo)
        assert count_nodes(nodo.left) == median_index(n)
        assert count_nodes(nodo.right) == n - 1 - median_index(n)


def test_children_respect_split_order():
    raiz = build(puntos_aleatorios(40, semilla=7))
    for nodo in iter_preorder(raiz):
        eje, otro = nodo.axis, 1 - nodo.axis
        clave = (nodo.point[eje], nodo.point[otro])
        for p in (n.point for n in iter_preorder(nodo.left)):
            assert (p[eje], p[otro]) <= clave
        for p in (n.point for n in iter_preorder(nodo.right)):
            assert (p[eje], p[otro]) >= clave


def test_build_is_deterministic_and_order_independent():
    puntos = puntos_aleatorios(30) + [(50, 50), (50, 50), (50, 10)]
    mezclados = list(puntos)
    random.Random(5).shuffle(mezclados)
    assert shape(build(puntos)) == shape(build(puntos))
    assert shape(build(puntos)) == shape(build(mezclados))


def test_caller_sequence_is_not_modified():
    puntos = list(EJEMPLO)
    build(puntos)
    assert puntos == EJEMPLO


def test_labels_follow_preorder():
    raiz = build(EJEMPLO)
    assert assign_labels(raiz) == 8
    etiquetas = [(n.label, n.point) for n in iter_preorder(raiz)]
    assert etiquetas == [
        ("P1", (4, 4)), ("P2", (2, 2)), ("P3", (1, 1)), ("P4", (3, 2)),
        ("P5", (6, 1)), ("P6", (9, 0)), ("P7", (5, 8)), ("P8", (8, 7)),
    ]


def test_new_nodes_have_unset_annotations():
    nodo = Node((1, 2), 0)
    assert nodo.label == ""
    assert nodo.add_step_index == -1
    assert nodo.split_step_index == -1


def test_kdtree_facade_replaces_previous_tree():
    kd = KDTree()
    kd.construir(EJEMPLO)
    assert kd.tamano == 8
    assert kd.altura() == 4
    assert kd.raiz.label == "P1"
    assert kd.todos_los_puntos()[0] == (4, 4)

    kd.construir([(1, 1)])
    assert kd.tamano == 1
    assert kd.todos_los_puntos() == [(1, 1)]

    kd.construir([])
    assert kd.raiz is None
    assert kd.tamano == 0
