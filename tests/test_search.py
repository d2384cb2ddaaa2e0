"""Tests for move generation, the heuristic, alpha-beta search and agents."""

import pytest

from conftest import card, make_state

from splendor.engine.agents import (
    AlphaBetaAgent, FirstLegalAgent, RandomAgent, create_agent,
)
from splendor.engine.alphabeta import WIN_SCORE, AlphaBeta, minimax
from splendor.engine.heuristic import MAX_SCORE_EXPONENT, Heuristic
from splendor.engine.movegen import generate_moves, legal_actions
from splendor.game.board import new_game
from splendor.game.resources import ResourceKind, ResourceMap
from splendor.game.rules import apply_action
from splendor.game.state import (
    NOBLES, Nobel, PickThree, PickTwo, Purchase, PurchaseReserved, Reserve, Skip,
)


class Node:
    """Hand-built game tree node exposing what the search needs."""

    def __init__(self, turn, value=0, children=(), winner=None):
        self.turn = turn
        self.value = value
        self.children = list(children)
        self._winner = winner

    def is_finished(self):
        return self._winner is not None

    def winner(self):
        return self._winner


def tree_moves(node):
    return [(child, i) for i, child in enumerate(node.children)]


def tree_value(node):
    return node.value


def two_ply_tree(leaf_values):
    return Node(0, children=[
        Node(1, children=[Node(0, value=v) for v in group]) for group in leaf_values
    ])


class TestMoveGeneration:
    def test_fresh_game_moves(self, game):
        actions = legal_actions(game)
        # Nothing affordable: 10 triples, 5 doubles, 12 reservations
        assert len(actions) == 27
        assert sum(isinstance(a, PickThree) for a in actions) == 10
        assert sum(isinstance(a, PickTwo) for a in actions) == 5
        assert sum(isinstance(a, Reserve) for a in actions) == 12

    def test_generation_order(self):
        state = make_state(decks=[[card("r", 0, "")], [], []])
        state.players[0].reserved = [card("u", 0, "")]
        kinds = [type(a) for a in legal_actions(state)]
        order = [Purchase, PurchaseReserved, PickThree, PickTwo, Reserve]
        assert kinds == sorted(kinds, key=order.index)
        assert kinds[0] is Purchase
        assert kinds[1] is PurchaseReserved
        assert kinds[-1] is Reserve

    def test_children_are_applied_clones(self, game):
        before = game.serialize()
        for child, action in generate_moves(game):
            assert child.turn == 1
            assert child.ply == 1
        assert game.serialize() == before

    def test_skip_when_nothing_is_legal(self):
        state = make_state(coins=ResourceMap.zeros())
        moves = generate_moves(state)
        assert [a for _, a in moves] == [Skip()]
        assert moves[0][0].turn == 1

    def test_skip_only_as_fallback(self, game):
        assert Skip() not in legal_actions(game)


class TestHeuristic:
    def test_symmetric_start_is_zero(self, game):
        assert Heuristic().evaluate(game) == 0

    def test_monotone_in_coins_cards_and_score(self):
        h = Heuristic()
        base = make_state()
        v0 = h.evaluate(base)

        richer = base.clone()
        richer.players[0].spendable[ResourceKind.RED] = 1
        assert h.evaluate(richer) > v0

        carded = base.clone()
        carded.players[0].permanent[ResourceKind.RED] = 1
        assert h.evaluate(carded) > h.evaluate(richer)

        scored = base.clone()
        scored.players[0].score = 3
        assert h.evaluate(scored) > v0

    def test_opponent_progress_lowers_value(self):
        h = Heuristic()
        state = make_state()
        v0 = h.evaluate(state)
        state.players[1].score = 2
        assert h.evaluate(state) < v0

    def test_perspective_flips(self):
        h = Heuristic()
        state = make_state()
        state.players[0].score = 5
        assert h.evaluate(state, seat=1) == -h.evaluate(state, seat=0)

    def test_score_term_is_bounded(self):
        state = make_state()
        state.players[0].score = 200
        assert Heuristic().evaluate(state) < WIN_SCORE
        assert Heuristic().player_eval(state, state.players[0]).score == 1 << MAX_SCORE_EXPONENT

    def test_nobel_terms_only_with_nobles_ruleset(self):
        h = Heuristic()
        standard = make_state()
        standard.players[0].wilds = 3
        standard.nobels = [Nobel.from_code(3, "2r")]
        ev = h.player_eval(standard, standard.players[0])
        assert ev.wilds == 0 and ev.nobels == 0

        nobles = make_state(ruleset=NOBLES)
        nobles.players[0].wilds = 3
        nobles.nobels = [Nobel.from_code(3, "2r")]
        far = h.player_eval(nobles, nobles.players[0])
        assert far.wilds == 6
        assert far.nobels == 4096 >> 2
        nobles.players[0].permanent[ResourceKind.RED] = 1
        assert h.player_eval(nobles, nobles.players[0]).nobels == 4096 >> 1

    def test_from_config(self):
        h = Heuristic.from_config({"card_weight": 7})
        assert h.card_weight == 7
        assert h.coin_weight == 1


class TestAlphaBeta:
    LEAVES = [[3, 12, 8], [2, 4, 6], [14, 5, 2]]

    def test_toy_tree_minimax(self):
        score, action = minimax(two_ply_tree(self.LEAVES), 2, tree_moves, tree_value)
        assert (score, action) == (3, 0)

    def test_toy_tree_pruning(self):
        search = AlphaBeta(depth=2, move_generator=tree_moves, evaluate=tree_value)
        score, action = search.search_with_score(two_ply_tree(self.LEAVES))
        assert (score, action) == (3, 0)
        # 13 nodes without pruning; the second reply subtree is cut after one leaf
        assert search.stats.nodes == 11
        assert search.stats.cutoffs >= 1

    def test_first_action_wins_ties(self):
        tree = two_ply_tree([[5, 7], [6, 5], [5, 9]])
        search = AlphaBeta(depth=2, move_generator=tree_moves, evaluate=tree_value)
        assert search.search_with_score(tree) == (5, 0)
        assert minimax(tree, 2, tree_moves, tree_value) == (5, 0)

    def test_terminal_nodes_score_from_seat_zero(self):
        tree = Node(0, children=[
            Node(1, children=[Node(0, winner=1)]),
            Node(1, children=[Node(0, winner=0)]),
        ])
        search = AlphaBeta(depth=4, move_generator=tree_moves, evaluate=tree_value)
        assert search.search_with_score(tree) == (WIN_SCORE, 1)

    def test_horizon_waits_for_seat_zero(self):
        # depth 1 still lets the opponent reply before evaluating
        tree = two_ply_tree([[10, -4], [1, 2]])
        search = AlphaBeta(depth=1, move_generator=tree_moves, evaluate=tree_value)
        assert search.search_with_score(tree) == (1, 1)

    @pytest.mark.parametrize("seed", [0, 1])
    def test_matches_minimax_on_real_states(self, seed):
        state = new_game(seed=seed)
        agent = RandomAgent(seed=seed)
        for _ in range(6):
            apply_action(state, agent.get_action(state))
        search = AlphaBeta(depth=2)
        assert search.search_with_score(state) == minimax(state, 2)

    def test_finds_winning_purchase(self):
        state = make_state(decks=[[card("r", 1, "1r")], [], []])
        state.players[0].score = 14
        state.players[0].spendable = ResourceMap.from_code("1r")
        score, action = AlphaBeta(depth=2).search_with_score(state)
        assert score == WIN_SCORE
        assert action == Purchase(0, 0)

    def test_does_not_mutate_state(self, game):
        before = game.serialize()
        AlphaBeta(depth=2).search(game)
        assert game.serialize() == before


class TestAgents:
    def test_first_legal(self, game):
        assert FirstLegalAgent().get_action(game) == legal_actions(game)[0]

    def test_first_legal_skips_when_stuck(self):
        assert FirstLegalAgent().get_action(make_state(coins=ResourceMap.zeros())) == Skip()

    def test_random_is_seeded(self, game):
        a = [RandomAgent(seed=3).get_action(game) for _ in range(3)]
        b = [RandomAgent(seed=3).get_action(game) for _ in range(3)]
        assert a == b
        assert all(x in legal_actions(game) for x in a)

    def test_alphabeta_plays_legal_move(self, game):
        action = AlphaBetaAgent(depth=1).get_action(game)
        assert action in legal_actions(game)

    def test_alphabeta_needs_two_players(self):
        state = new_game(["a", "b", "c"], seed=0)
        with pytest.raises(ValueError):
            AlphaBetaAgent(depth=1).get_action(state)

    def test_create_agent(self):
        agent = create_agent({"type": "alphabeta", "depth": 2}, {"coin_weight": 3})
        assert isinstance(agent, AlphaBetaAgent)
        assert agent.search.depth == 2
        assert agent.search.heuristic.coin_weight == 3
        assert isinstance(create_agent({"type": "random", "seed": 1}), RandomAgent)
        assert isinstance(create_agent({"type": "first_legal"}), FirstLegalAgent)

    def test_create_unknown_agent(self):
        with pytest.raises(ValueError):
            create_agent({"type": "mcts"})
