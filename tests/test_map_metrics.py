import json

import pytest

from dgmapper.dungeon import Map, MapConfig, generate_map, parse_chess_string as P

from map_test_utils import bfs_distances, brute_force_diameter, brute_force_eccentricity, tree_edges


def test_distance_to_base(tree_map):
    assert tree_map.distance_to_base(tree_map.base) == 0
    assert tree_map.distance_to_base(P("d3")) == 1
    assert tree_map.distance_to_base(P("b1")) == 3


def test_subtree_size(tree_map):
    assert tree_map.subtree_size(tree_map.base) == tree_map.room_count
    assert tree_map.subtree_size(P("c2")) == 3
    assert tree_map.subtree_size(P("a3")) == 1
    assert tree_map.subtree_size((9, 9)) == 0


def test_tree_height(tree_map):
    assert tree_map.get_tree_height() == 3
    assert Map(2, 2).get_tree_height() == -1
    assert Map.parse("1 1 . a1 -").get_tree_height() == 0


def test_farthest_point_and_eccentricity(tree_map):
    assert tree_map.get_farthest_point(tree_map.base) == (P("b1"), 3)
    assert tree_map.get_eccentricity(P("b1")) == 5
    assert tree_map.get_eccentricity(P("a3")) == 5
    assert tree_map.get_eccentricity(tree_map.base) == 3


def test_diameter(tree_map, plus_map):
    assert tree_map.get_diameter() == 5
    assert plus_map.get_diameter() == 2
    assert Map.parse("1 1 . a1 -").get_diameter() == 0


@pytest.mark.parametrize("seed", range(12))
def test_diameter_matches_brute_force_on_generated_maps(seed):
    m = generate_map(MapConfig(width=5, height=5, room_count=18, seed=seed))
    assert m.get_diameter() == brute_force_diameter(m)


@pytest.mark.parametrize("seed", range(4))
def test_eccentricity_and_distance_match_brute_force(seed):
    m = generate_map(MapConfig(width=5, height=5, room_count=20, seed=seed))
    adj = tree_edges(m)
    from_base = bfs_distances(adj, m.base)
    for p in m.get_rooms():
        assert m.get_eccentricity(p) == brute_force_eccentricity(m, p)
        assert m.distance_to_base(p) == from_base[p]


def test_subtree_sizes_add_up(tree_map):
    base = tree_map.base
    children = [base.add(d) for d in tree_map.children_dirs(base)]
    assert 1 + sum(tree_map.subtree_size(c) for c in children) == tree_map.room_count


def test_summary_contents(tree_map):
    s = tree_map.summary()
    assert s['width'] == 4 and s['height'] == 4
    assert s['base'] == "c3"
    assert s['boss'] == "b1"
    assert s['rooms'] == 7
    assert s['gaps'] == 9
    assert s['max_rooms'] == 16
    assert s['dead_ends'] == ["a3", "d3"]
    assert s['bonus_dead_ends'] == ["a3", "d3"]
    assert s['crit_endpoints'] == ["b1"]
    assert s['crit_rooms'] == ["b1", "c1", "c2", "c3"]
    assert s['tree_height'] == 3
    assert s['diameter'] == 5
    assert s['base_eccentricity'] == 3
    assert s['room_types']["c3"] == 14
    assert set(s['room_types']) == {p.to_chess_string() for p in tree_map.get_rooms()}
    assert s['metrics']['dead_ends_removed'] == 0
    # Must be JSON serializable as-is.
    json.dumps(s)


def test_summary_of_empty_map():
    s = Map(3, 3).summary()
    assert s['base'] == "-"
    assert s['rooms'] == 0
    assert s['crit_rooms'] == []
    assert s['diameter'] == 0
    assert s['tree_height'] == -1


def test_metrics_accumulate_across_operations(tree_map):
    tree_map.remove_dead_end(P("a3"))
    tree_map.remove_dead_end(P("d3"))
    tree_map.add_crit_endpoint(P("b3"))
    tree_map.backtrack_crit_endpoint(P("b3"))
    tree_map.rebase(P("c1"))
    m = tree_map.metrics
    assert m['dead_ends_removed'] == 2
    assert m['crit_backtracks'] == 1
    assert m['rebases'] == 1
    assert m['crit_endpoints_added'] == 2  # b3, then c3 on backtrack
