# dashrun/tests/test_game_args.py
from dashrun.game.config import FPS, SEED_DEFAULT
from dashrun.game.game import parse_args, resolve_seed


def test_defaults():
    args = parse_args([])
    assert args.seed is None
    assert args.fps == FPS
    assert not args.mute
    assert resolve_seed(args.seed) == SEED_DEFAULT


def test_seed_policy():
    assert resolve_seed(-1) is None, "-1 asks for a random layout"
    assert resolve_seed(42) == 42
    args = parse_args(["--seed", "7", "--mute", "--fps", "30", "--log-level", "debug"])
    assert (args.seed, args.mute, args.fps, args.log_level) == (7, True, 30, "debug")
