"""
Unit Tests for Search Module

Tests for minimax search, iterative deepening and move selection.
"""

import random

import chess
import pytest

from minichess.board import Location, Move, TurnState, apply_move, decode_board, get_starting_board
from minichess.config import EngineConfig
from minichess.evaluation import ClassicalEvaluator
from minichess.rules import generate_legal_moves, record_visit
from minichess.search import evaluate_position, find_best_move, minimax, select_move
from minichess.search.minimax import (
    ALPHA_INIT,
    BETA_INIT,
    early_mate_multiplier,
    rank_moves,
    rankings_equal,
)


def fixed_depth(depth: int, **kwargs) -> EngineConfig:
    return EngineConfig(max_depth=depth, iterative_deepening=False, **kwargs)


def search_position(text: str, turn_state: TurnState, config: EngineConfig, evaluator=None):
    board = decode_board(text)
    return board, find_best_move(board, turn_state, record_visit(board, {}), evaluator=evaluator, config=config)


class TestMinimax:
    """Tests for minimax search algorithm."""

    @pytest.fixture
    def evaluator(self):
        """Create evaluator for testing."""
        return ClassicalEvaluator()

    def test_white_mate_in_one(self, evaluator):
        board, result = search_position(
            "k..../...../K..../...../....R", TurnState.WHITE_TURN, fixed_depth(1), evaluator
        )

        best = result.best_move.move
        assert (best.start, best.end) == (Location(4, 4), Location(0, 4)), f"Should find Re5#, got {best}"
        assert result.score == pytest.approx(0.9 * 999999), "Mate one ply down scores 0.9"
        assert result.nodes_searched > 0

    def test_black_mate_in_one(self, evaluator):
        board, result = search_position(
            "....r/...../k..../...../K....", TurnState.BLACK_TURN, fixed_depth(2), evaluator
        )

        best = result.best_move.move
        assert (best.start, best.end) == (Location(0, 4), Location(4, 4)), f"Should find Re1#, got {best}"
        assert result.score < -800000

    def test_mate_line_ends_at_mate(self, evaluator):
        board, result = search_position(
            "k..../...../K..../...../....R", TurnState.WHITE_TURN, fixed_depth(3), evaluator
        )

        line = result.best_move.anticipated_line
        assert len(line) == 1, "Nothing follows a checkmate"
        assert line[0] == apply_move(result.best_move.move, board)

    def test_wins_hanging_queen(self, evaluator):
        board, result = search_position(
            "....k/...../q..../...../R..K.", TurnState.WHITE_TURN, fixed_depth(2), evaluator
        )

        best = result.best_move.move
        assert (best.start, best.end) == (Location(4, 0), Location(2, 0))
        assert best.is_capture
        assert result.score > 4

    def test_ranking_order(self, evaluator):
        """White's moves are ranked high to low, Black's low to high."""
        _, white = search_position("rbkqn/ppppp/...../PPPPP/RBKQN", TurnState.WHITE_TURN, fixed_depth(2))
        _, black = search_position("....r/...../k..../...../K....", TurnState.BLACK_TURN, fixed_depth(2))

        white_scores = [evaluated.score for evaluated in white.ranked_moves]
        black_scores = [evaluated.score for evaluated in black.ranked_moves]

        assert white_scores == sorted(white_scores, reverse=True)
        assert black_scores == sorted(black_scores)

    def test_every_legal_move_is_ranked(self, evaluator):
        board, result = search_position(
            "rbkqn/ppppp/...../PPPPP/RBKQN", TurnState.WHITE_TURN, fixed_depth(2), evaluator
        )

        ranked = {(evaluated.move.start, evaluated.move.end) for evaluated in result.ranked_moves}
        legal = {(move.start, move.end) for move in generate_legal_moves(board, TurnState.WHITE_TURN)}

        assert ranked == legal

    def test_anticipated_line_length(self, evaluator):
        board, result = search_position(
            "rbkqn/ppppp/...../PPPPP/RBKQN", TurnState.WHITE_TURN, fixed_depth(2), evaluator
        )

        for evaluated in result.ranked_moves:
            assert evaluated.anticipated_line[0] == apply_move(evaluated.move, board)
        assert len(result.best_move.anticipated_line) == 2

    @pytest.mark.parametrize("text,turn_state,depth", [
        ("rbkqn/ppppp/...../PPPPP/RBKQN", TurnState.WHITE_TURN, 2),
        ("rbkqn/ppppp/...../PPPPP/RBKQN", TurnState.BLACK_TURN, 2),
        ("r.k../.p.q./..N../P.P../R.K.B", TurnState.BLACK_TURN, 2),
        ("rbkqn/ppppp/...../PPPPP/RBKQN", TurnState.WHITE_TURN, 3),
        ("r.k../.p.q./..N../P.P../R.K.B", TurnState.BLACK_TURN, 3),
        ("rbk.n/.p.pp/.Q.../...PP/RBK.N", TurnState.BLACK_TURN, 3),
    ])
    def test_alpha_beta_correctness(self, evaluator, text, turn_state, depth):
        """Alpha-beta pruning finds the same best move and score as full minimax."""
        board = decode_board(text)
        moves = generate_legal_moves(board, turn_state)
        visited = record_visit(board, {})

        pruned = evaluate_position(board, moves, turn_state, visited, depth, ALPHA_INIT, BETA_INIT, evaluator)
        full = evaluate_position(
            board, moves, turn_state, visited, depth, ALPHA_INIT, BETA_INIT, evaluator, prune=False
        )

        assert pruned.ranked_moves[0].move == full.ranked_moves[0].move
        assert pruned.score == pytest.approx(full.score, rel=1e-12, abs=1e-12)

    def test_tiebreak_does_not_leak_into_pruning(self, evaluator):
        """
        Below the first ply every score carries a tie-break term, so the
        window handed to a child must be shifted by it. Otherwise a depth-3
        search cuts off a line that full minimax scores differently.
        """
        board = decode_board("rbk.n/.p.pp/.Q.../...PP/RBK.N")
        moves = generate_legal_moves(board, TurnState.BLACK_TURN)
        visited = record_visit(board, {})

        pruned = evaluate_position(
            board, moves, TurnState.BLACK_TURN, visited, 3, ALPHA_INIT, BETA_INIT, evaluator
        )
        full = evaluate_position(
            board, moves, TurnState.BLACK_TURN, visited, 3, ALPHA_INIT, BETA_INIT, evaluator, prune=False
        )

        assert pruned.score == pytest.approx(full.score, rel=1e-12, abs=1e-12)
        assert [e.move for e in pruned.ranked_moves[:1]] == [e.move for e in full.ranked_moves[:1]]

    def test_pruning_searches_fewer_nodes(self, evaluator):
        board = get_starting_board()
        moves = generate_legal_moves(board, TurnState.WHITE_TURN)
        visited = record_visit(board, {})

        pruned_nodes, full_nodes = [0], [0]
        evaluate_position(
            board, moves, TurnState.WHITE_TURN, visited, 3, ALPHA_INIT, BETA_INIT, evaluator,
            nodes_searched=pruned_nodes,
        )
        evaluate_position(
            board, moves, TurnState.WHITE_TURN, visited, 3, ALPHA_INIT, BETA_INIT, evaluator,
            nodes_searched=full_nodes, prune=False,
        )

        assert pruned_nodes[0] < full_nodes[0]

    def test_deterministic(self, evaluator):
        _, first = search_position("rbkqn/ppppp/...../PPPPP/RBKQN", TurnState.WHITE_TURN, fixed_depth(3))
        _, second = search_position("rbkqn/ppppp/...../PPPPP/RBKQN", TurnState.WHITE_TURN, fixed_depth(3))

        assert first.best_move == second.best_move
        assert first.score == second.score
        assert rankings_equal(first.ranked_moves, second.ranked_moves)

    def test_leaf_returns_static_eval(self, evaluator):
        board = decode_board("k..../P..../..q../...../R...K")

        result = evaluate_position(
            board, generate_legal_moves(board, TurnState.WHITE_TURN), TurnState.WHITE_TURN,
            record_visit(board, {}), 0, ALPHA_INIT, BETA_INIT, evaluator,
        )

        assert result.score == evaluator.evaluate(board)
        assert result.ranked_moves == []

    def test_illegal_move_list_raises(self, evaluator):
        """Moving the king next to the enemy king is never a legal move."""
        board = decode_board("k..../...../.K.../...../....R")
        king = chess.Piece(chess.KING, chess.WHITE)
        bad_move = Move(Location(2, 1), Location(1, 1), king)

        with pytest.raises(RuntimeError):
            evaluate_position(
                board, [bad_move], TurnState.WHITE_TURN, record_visit(board, {}),
                1, ALPHA_INIT, BETA_INIT, evaluator,
            )

    def test_game_over_raises_error(self, evaluator):
        board = decode_board("k...R/...../K..../...../.....")

        with pytest.raises(ValueError):
            find_best_move(board, TurnState.BLACK_TURN, record_visit(board, {}), evaluator=evaluator)

    def test_repetition_draw_raises_error(self):
        board = get_starting_board()

        with pytest.raises(ValueError):
            find_best_move(board, TurnState.WHITE_TURN, {board.encode(): 3})


class TestScoreAdjustments:
    """Tests for the mate multiplier and the depth it is measured from."""

    def test_early_mate_multiplier(self):
        assert early_mate_multiplier(3, 3) == pytest.approx(1.0)
        assert early_mate_multiplier(2, 3) == pytest.approx(0.9)
        assert early_mate_multiplier(0, 3) == pytest.approx(0.7)
        assert early_mate_multiplier(0, 20) == pytest.approx(0.1)

    def test_faster_mate_preferred(self):
        """A mate found sooner keeps more of its value than the same mate found deeper."""
        assert early_mate_multiplier(2, 3) > early_mate_multiplier(0, 3)

    @pytest.mark.parametrize("depth", [1, 2, 3, 4])
    def test_mate_scale_measured_from_pass_root(self, depth):
        """
        The multiplier counts plies from the root of the pass being searched,
        so a mate on the first ply is worth 0.9 at every pass depth.
        """
        board = decode_board("k..../...../K..../...../....R")

        result = evaluate_position(
            board, generate_legal_moves(board, TurnState.WHITE_TURN), TurnState.WHITE_TURN,
            record_visit(board, {}), depth, ALPHA_INIT, BETA_INIT, ClassicalEvaluator(),
        )

        assert result.score == pytest.approx(0.9 * 999999, abs=1)
        assert result.ranked_moves[0].move.end == Location(0, 4)

    def test_deepened_mate_keeps_first_ply_scale(self):
        board, result = search_position(
            "k..../...../K..../...../....R", TurnState.WHITE_TURN, EngineConfig(think_time_ms=200)
        )

        assert result.score == pytest.approx(0.9 * 999999, abs=1)


class TestIterativeDeepening:
    """Tests for the iterative deepening driver."""

    @pytest.fixture
    def board(self):
        return get_starting_board()

    def test_deepening_is_not_capped_by_max_depth(self):
        """
        Black's only move is the pawn push, after which Rd5 mates. The
        ranking settles at depth 2, so the third pass confirms the steady
        state even though max_depth is 1.
        """
        board = decode_board("k..../...../K...p/...../.R.R.")
        config = EngineConfig(max_depth=1, think_time_ms=60000)

        ranked, depth = rank_moves(
            board, TurnState.BLACK_TURN, record_visit(board, {}), ClassicalEvaluator(), config
        )

        assert depth == 3, f"Deepening should run to steady state, stopped at {depth}"
        assert len(ranked) == 1
        assert len(ranked[0].anticipated_line) == 2
        assert ranked[0].score == pytest.approx(0.8 * 999999, abs=1)

    def test_deepening_stops_at_ceiling(self, board, monkeypatch):
        monkeypatch.setattr(minimax, "MAX_DEPTH", 2)
        config = EngineConfig(max_depth=1, think_time_ms=60000)

        ranked, depth = rank_moves(
            board, TurnState.WHITE_TURN, record_visit(board, {}), ClassicalEvaluator(), config
        )

        assert depth == 2
        assert len(ranked) == 6

    def test_max_depth_sets_fixed_pass(self, board):
        _, depth = rank_moves(
            board, TurnState.WHITE_TURN, record_visit(board, {}), ClassicalEvaluator(), fixed_depth(3)
        )

        assert depth == 3

    def test_time_limit_still_completes_first_pass(self, board):
        config = EngineConfig(max_depth=4, think_time_ms=0)

        ranked, depth = rank_moves(
            board, TurnState.WHITE_TURN, record_visit(board, {}), ClassicalEvaluator(), config
        )

        assert depth == 1
        assert all(len(evaluated.anticipated_line) == 1 for evaluated in ranked)

    def test_fixed_depth_skips_deepening(self, board):
        nodes = [0]
        _, depth = rank_moves(
            board, TurnState.WHITE_TURN, record_visit(board, {}), ClassicalEvaluator(), fixed_depth(2),
            nodes,
        )

        assert depth == 2
        # Root, its 6 children and their 36 children
        assert nodes[0] <= 1 + 6 + 36

    def test_deepening_finds_mate(self):
        board, result = search_position(
            "k..../...../K..../...../....R", TurnState.WHITE_TURN,
            EngineConfig(think_time_ms=200),
        )

        assert result.best_move.move.end == Location(0, 4)
        assert result.depth >= 1

    def test_rankings_equal(self, board):
        moves = generate_legal_moves(board, TurnState.WHITE_TURN)
        ranked, _ = rank_moves(
            board, TurnState.WHITE_TURN, record_visit(board, {}), ClassicalEvaluator(), fixed_depth(1)
        )

        assert rankings_equal(ranked, list(ranked))
        assert not rankings_equal(ranked, ranked[1:])
        assert not rankings_equal(ranked, list(reversed(ranked)))
        assert len(moves) == len(ranked)


class TestMoveSelection:
    """Tests for intelligence-factor move selection."""

    RANKING = ["best", "second", "third", "worst"]

    def test_perfect_player_takes_best(self):
        rng = random.Random(0)

        for _ in range(50):
            assert select_move(self.RANKING, 1.0, rng) == ("best", 0)

    def test_hopeless_player_takes_worst(self):
        rng = random.Random(0)

        for _ in range(50):
            assert select_move(self.RANKING, 0.0, rng) == ("worst", 3)

    def test_seeded_selection_is_reproducible(self):
        first = [select_move(self.RANKING, 0.5, random.Random(42))[1] for _ in range(10)]
        second = [select_move(self.RANKING, 0.5, random.Random(42))[1] for _ in range(10)]

        assert first == second

    def test_distribution(self):
        """With factor 0.5 the best move is kept about half the time."""
        rng = random.Random(1234)

        ranks = [select_move(self.RANKING, 0.5, rng)[1] for _ in range(2000)]

        assert 850 < ranks.count(0) < 1150
        assert ranks.count(0) > ranks.count(1) > ranks.count(2)

    def test_single_move(self):
        assert select_move(["only"], 0.0, random.Random(0)) == ("only", 0)

    def test_empty_ranking(self):
        with pytest.raises(ValueError):
            select_move([], 1.0)

    def test_factor_out_of_range(self):
        with pytest.raises(ValueError):
            select_move(self.RANKING, 1.5)
        with pytest.raises(ValueError):
            select_move(self.RANKING, -0.1)

    def test_search_uses_intelligence_factor(self):
        config = fixed_depth(1, intelligence_factor_white=0.0)

        board, result = search_position("rbkqn/ppppp/...../PPPPP/RBKQN", TurnState.WHITE_TURN, config)

        assert result.chosen_rank == len(result.ranked_moves) - 1
        assert result.chosen_move == result.ranked_moves[-1]
        assert result.best_move == result.ranked_moves[0]


class TestEngineConfig:
    """Tests for EngineConfig validation."""

    def test_defaults(self):
        config = EngineConfig()

        assert config.max_depth == 4
        assert config.iterative_deepening
        assert config.intelligence_factor(TurnState.WHITE_TURN) == 1.0

    def test_per_side_settings(self):
        config = EngineConfig(intelligence_factor_black=0.3, black_is_human=True)

        assert config.intelligence_factor(TurnState.BLACK_TURN) == 0.3
        assert config.is_human(TurnState.BLACK_TURN)
        assert not config.is_human(TurnState.WHITE_TURN)

    @pytest.mark.parametrize("kwargs", [
        {"max_depth": 0},
        {"think_time_ms": -1},
        {"intelligence_factor_white": 1.5},
        {"intelligence_factor_black": -0.5},
        {"ai_move_delay_ms": -10},
        {"board_size": 4},
    ])
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            EngineConfig(**kwargs)
