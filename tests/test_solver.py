import pytest

from mastermind_solver.analysis import RepeatedGuess
from mastermind_solver.errors import GuessPoolExhausted
from mastermind_solver.feedback import Feedback
from mastermind_solver.game import GameConfig, MastermindGame
from mastermind_solver.solver import GameSolver


@pytest.fixture
def config():
    return GameConfig(alphabet=range(1, 10), code_length=3, max_turns=12)


def test_solves_known_secret_within_turn_budget(config):
    game = MastermindGame(config, secret=[2, 7, 9])
    solver = GameSolver(config, game)

    stats = solver.solve()

    assert stats.solution == (2, 7, 9)
    assert stats.attempted_guesses[-1] == (2, 7, 9)
    assert len(stats.attempted_guesses) <= 12
    assert len(set(stats.attempted_guesses)) == len(stats.attempted_guesses)
    assert game.won


def test_first_guess_and_pruning(config):
    solver = GameSolver(config)
    assert len(solver.all_variations) == 504

    guess = solver.get_next_guess()
    assert guess == (1, 2, 3)

    solver.prune_remaining_variations([1, 2, 3], Feedback(0, 1))
    assert len(solver.remaining_variations) < 504
    assert (2, 7, 9) in solver.remaining_variations


def test_aborts_when_oracle_stops_answering(config):
    short = GameConfig(alphabet=range(1, 10), code_length=3, max_turns=1)
    game = MastermindGame(short, secret=[2, 7, 9])
    solver = GameSolver(short, game)

    stats = solver.solve()

    assert stats.solution is None
    assert stats.attempted_guesses == [(1, 2, 3)]


def test_drained_guess_pool_is_fatal(config):
    game = MastermindGame(config, secret=[2, 7, 9])
    solver = GameSolver(config, game)
    # Contradictory replies leave nothing to guess
    solver.prune_remaining_variations((1, 2, 3), Feedback(3, 0))
    solver.prune_remaining_variations((1, 2, 3), Feedback(0, 0))
    assert len(solver.remaining_variations) == 0

    with pytest.raises(GuessPoolExhausted):
        solver.solve()


def test_repetition_mode_has_no_solve():
    config = GameConfig(alphabet="123456", code_length=4, allow_repetition=True)
    solver = GameSolver(config, MastermindGame(config, seed=0))
    with pytest.raises(NotImplementedError):
        solver.solve()
    # Interactive use still works
    assert len(solver.get_next_guess()) == 4


def test_solve_needs_an_oracle(config):
    with pytest.raises(RuntimeError):
        GameSolver(config).solve()


def test_reset_restores_universe(config):
    game = MastermindGame(config, secret=[2, 7, 9])
    solver = GameSolver(config, game)
    solver.solve()

    solver.reset()

    assert len(solver.remaining_variations) == len(solver.all_variations)
    assert solver.stats.attempted_guesses == []
    assert solver.stats.solution is None


def test_game_analysis_from_solver(config):
    game = MastermindGame(config)
    solver = GameSolver(config, game)
    results = []
    for secret in [(2, 7, 9), (1, 2, 3)]:
        game.reset()
        solver.reset()
        game.set_code(secret)
        results.append(solver.solve())

    analysis = solver.get_game_analysis(results)

    assert analysis.unresolved == 0
    assert analysis.min_guesses == 1  # (1, 2, 3) is the opening guess
    assert analysis.max_guesses == len(results[0].attempted_guesses)
    assert analysis.median == (analysis.min_guesses + analysis.max_guesses) / 2


def test_repeated_guesses_climb_the_offset_ladder():
    config = GameConfig()
    game = MastermindGame(config, secret=["6", "5", "4"])
    solver = GameSolver(config, game)

    stats = solver.solve()

    # (4,6,5), (6,5,4) and (5,4,6) are left after the second reply and no
    # guess tells them apart, so the frequency heuristic keeps coming back
    # to codes already played until it runs out of symbols.
    assert stats.attempted_guesses == [
        ("1", "2", "3"),
        ("4", "5", "6"),
        ("5", "6", "4"),
        ("6", "4", "5"),
        ("5", "6"),
        ("6", "5", "4"),
    ]
    assert stats.solution == ("6", "5", "4")
    assert stats.repeated_guesses == [
        RepeatedGuess(("4", "5", "6"), 1),
        RepeatedGuess(("4", "5", "6"), 1),
        RepeatedGuess(("5", "6", "4"), 2),
        RepeatedGuess(("4", "5", "6"), 1),
        RepeatedGuess(("5", "6", "4"), 2),
        RepeatedGuess(("6", "4", "5"), 3),
        RepeatedGuess(("4", "5", "6"), 4),
        RepeatedGuess(("5", "6", "4"), 5),
        RepeatedGuess(("6", "4", "5"), 6),
        RepeatedGuess(("4", "5", "6"), 7),
    ]
