"""
Minichess Engine

A rules engine and automated player for reduced-board chess (5*5 Gardner-
style layout, plus a 3*3 training board), with minimax search, alpha-beta
pruning and iterative deepening.

## Architecture

The engine is organized into several key modules:

1. **board**: Board representation
   - Immutable boards of python-chess Pieces
   - Encoding / decoding, locations, moves and promotion

2. **rules**: Game rules
   - Attack and check detection
   - Legal move generation and move maps for front ends
   - Checkmate, stalemate, repetition and insufficient material

3. **evaluation**: Position evaluation functions
   - Abstract Evaluator interface (swappable design)
   - ClassicalEvaluator: material + pawn advancement

4. **search**: Search algorithms
   - Minimax with alpha-beta pruning and iterative deepening
   - Anticipated lines for every ranked move
   - Intelligence-factor move selection for imperfect players

5. **game**: Headless game session for front ends

6. **utils**: Perft and the puzzle suite

## Quick Start

```python
from minichess.board import TurnState, get_starting_board
from minichess.rules import record_visit
from minichess.search import find_best_move

board = get_starting_board()
result = find_best_move(board, TurnState.WHITE_TURN, record_visit(board, {}))
print(f"Best move: {result.best_move.move} (score: {result.score:.2f})")
```

Or play a whole game:

```python
from minichess.game import GameSession

session = GameSession()
print(session.play_until_over())
```

## Version

0.1.0
"""

__version__ = "0.1.0"
__license__ = "MIT"

from minichess.config import EngineConfig
from minichess.evaluation import ClassicalEvaluator, Evaluator
from minichess.game import GameSession
from minichess.search import find_best_move, select_move

__all__ = [
    'EngineConfig',
    'Evaluator',
    'ClassicalEvaluator',
    'GameSession',
    'find_best_move',
    'select_move',
]
