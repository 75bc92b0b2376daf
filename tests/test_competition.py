"""抽签、钓位分配与轮换的纯函数测试"""

import random
from collections import Counter

from models import SpotAssignment, SpotSide
from utils.competition import assign_spots, rotate_order, seat_capacity, shuffle_participants


def seat(spot, side):
    return SpotAssignment(spot, SpotSide(side))


class TestAssignSpots:

    def test_four_participants_two_spots(self):
        spots = assign_spots([10, 20, 30, 40], 2)
        assert spots == {
            10: seat(1, 'left'),
            20: seat(1, 'right'),
            30: seat(2, 'left'),
            40: seat(2, 'right'),
        }

    def test_after_one_rotation(self):
        order = rotate_order([10, 20, 30, 40])
        assert order == [40, 10, 20, 30]
        assert assign_spots(order, 2) == {
            40: seat(1, 'left'),
            10: seat(1, 'right'),
            20: seat(2, 'left'),
            30: seat(2, 'right'),
        }

    def test_odd_count_leaves_last_right_side_empty(self):
        spots = assign_spots([1, 2, 3], 2)
        assert spots[3] == seat(2, 'left')
        assert len(spots) == 3

    def test_overflow_participants_are_unseated(self):
        spots = assign_spots([1, 2, 3, 4, 5], 2)
        assert set(spots) == {1, 2, 3, 4}
        assert 5 not in spots

    def test_no_spot_side_pair_is_shared(self):
        spots = assign_spots(list(range(1, 11)), 5)
        pairs = [(a.spot, a.side) for a in spots.values()]
        assert len(pairs) == len(set(pairs))

    def test_is_deterministic(self):
        order = [7, 3, 9, 1]
        assert assign_spots(order, 3) == assign_spots(list(order), 3)

    def test_empty_order(self):
        assert assign_spots([], 4) == {}


class TestRotateOrder:

    def test_last_moves_to_front(self):
        assert rotate_order([1, 2, 3]) == [3, 1, 2]

    def test_does_not_modify_input(self):
        order = [1, 2, 3]
        rotate_order(order)
        assert order == [1, 2, 3]

    def test_full_cycle_returns_to_start(self):
        order = [5, 6, 7, 8, 9]
        rotated = order
        for _ in range(len(order)):
            rotated = rotate_order(rotated)
        assert rotated == order

    def test_empty_and_single(self):
        assert rotate_order([]) == []
        assert rotate_order([4]) == [4]


class TestShuffleParticipants:

    def test_is_permutation(self):
        ids = list(range(1, 21))
        shuffled = shuffle_participants(ids, random.Random(3))
        assert sorted(shuffled) == ids
        assert ids == list(range(1, 21))

    def test_same_seed_same_order(self):
        ids = [11, 12, 13, 14, 15]
        assert shuffle_participants(ids, random.Random(99)) == shuffle_participants(ids, random.Random(99))

    def test_all_permutations_roughly_equally_likely(self):
        rng = random.Random(2024)
        counts = Counter(tuple(shuffle_participants([1, 2, 3], rng)) for _ in range(6000))
        assert len(counts) == 6
        for count in counts.values():
            assert 850 < count < 1150

    def test_single_participant(self):
        assert shuffle_participants([42]) == [42]


def test_seat_capacity():
    assert seat_capacity(10) == 20
    assert seat_capacity(0) == 0
    assert seat_capacity(None) == 0
