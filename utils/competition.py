#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
钓鱼赛事管理系统 - 比赛执行的纯函数（抽签、钓位分配、轮换）
"""

import random

from models import SpotAssignment, SpotSide


def shuffle_participants(user_ids, rng=None):
    """随机抽签，返回新的出场顺序

    Fisher-Yates 洗牌，所有排列等概率；rng 可注入以便测试复现。
    """
    rng = rng or random.Random()
    order = list(user_ids)
    for i in range(len(order) - 1, 0, -1):
        j = rng.randint(0, i)
        order[i], order[j] = order[j], order[i]
    return order


def assign_spots(order, spots):
    """根据出场顺序分配钓位

    第 i 个钓位（从 1 开始）由顺序中第 2i-2 位坐左侧、第 2i-1 位坐右侧。
    顺序长度超过 2*spots 时，多出的选手不分配钓位。
    """
    participant_spots = {}
    for i in range(spots):
        left_idx = i * 2
        right_idx = i * 2 + 1
        if left_idx < len(order):
            participant_spots[order[left_idx]] = SpotAssignment(i + 1, SpotSide.LEFT)
        if right_idx < len(order):
            participant_spots[order[right_idx]] = SpotAssignment(i + 1, SpotSide.RIGHT)
    return participant_spots


def rotate_order(order):
    """顺时针轮换一位：最后一位移到最前"""
    if not order:
        return []
    return [order[-1]] + list(order[:-1])


def seat_capacity(spots):
    return 2 * max(spots or 0, 0)
