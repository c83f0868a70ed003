"""
Unit tests for the Gymnasium environment.

Tests spaces, action encoding, rewards, masks and rendering.
"""
import pytest
import numpy as np
from minefield import ActionType, BoardConfig, MinefieldEnv, BEGINNER


@pytest.fixture
def env() -> MinefieldEnv:
    """Beginner environment."""
    environment = MinefieldEnv()
    environment.reset(seed=0)
    return environment


@pytest.fixture
def small_env() -> MinefieldEnv:
    """3x3 environment with a known mine in the middle."""
    environment = MinefieldEnv(BoardConfig(3, 3, 0.12), render_mode="ansi")
    environment.reset(seed=0)
    environment.engine.load(3, 3, [(1, 1)])
    return environment


# ============================================================================
# Space Tests
# ============================================================================

class TestSpaces:
    """Test observation and action spaces."""

    def test_action_space_covers_three_action_types(self, env: MinefieldEnv) -> None:
        """One action per cell and action type."""
        assert env.action_space.n == 3 * 81

    def test_observation_matches_space(self, env: MinefieldEnv) -> None:
        """Reset observation lies in the observation space."""
        obs, info = env.reset(seed=1)
        assert obs.shape == (BEGINNER.height, BEGINNER.width)
        assert env.observation_space.contains(obs)
        assert np.all(obs == -1)
        assert info["game_state"] == "PLAYING"
        assert info["remaining_mines"] == 10

    def test_reset_seed_is_reproducible(self) -> None:
        """Equal seeds deal equal boards."""
        first = MinefieldEnv()
        second = MinefieldEnv()
        first.reset(seed=7)
        second.reset(seed=7)
        assert [c.kind for c in first.engine.board] == [
            c.kind for c in second.engine.board
        ]

    def test_action_encoding(self, env: MinefieldEnv) -> None:
        """Flat indices map to (type, x, y) and back."""
        action = env.encode_action(ActionType.CHORD, 4, 2)
        assert action == 2 * 81 + 2 * 9 + 4
        assert env.decode_action(action) == (ActionType.CHORD, 4, 2)


# ============================================================================
# Step Tests
# ============================================================================

class TestStep:
    """Test action execution and rewards."""

    def test_safe_reveal_rewards_one(self, small_env: MinefieldEnv) -> None:
        """Opening a safe cell gives +1."""
        action = small_env.encode_action(ActionType.REVEAL, 0, 0)
        obs, reward, terminated, truncated, info = small_env.step(action)
        assert reward == 1.0
        assert obs[0, 0] == 1
        assert terminated is False
        assert truncated is False
        assert info["revealed"] == 1

    def test_noop_action_is_penalised(self, small_env: MinefieldEnv) -> None:
        """Repeating an action that changes nothing gives -0.1."""
        action = small_env.encode_action(ActionType.REVEAL, 0, 0)
        small_env.step(action)
        _, reward, _, _, _ = small_env.step(action)
        assert reward == pytest.approx(-0.1)

    def test_mine_terminates_with_penalty(self, small_env: MinefieldEnv) -> None:
        """Hitting the mine gives -10 and ends the episode."""
        action = small_env.encode_action(ActionType.REVEAL, 1, 1)
        obs, reward, terminated, _, info = small_env.step(action)
        assert reward == -10.0
        assert terminated is True
        assert obs[1, 1] == 10
        assert info["game_state"] == "LOST"

    def test_win_rewards_ten(self) -> None:
        """Completing the board gives +10."""
        env = MinefieldEnv(BoardConfig(2, 2, 0.25))
        env.reset(seed=0)
        env.engine.load(2, 2, [(0, 0)])
        _, reward, _, _, _ = env.step(env.encode_action(ActionType.FLAG, 0, 0))
        assert reward == 1.0
        env.step(env.encode_action(ActionType.REVEAL, 1, 1))
        _, reward, terminated, _, info = env.step(
            env.encode_action(ActionType.CHORD, 1, 1)
        )
        assert reward == 10.0
        assert terminated is True
        assert info["game_state"] == "WON"


# ============================================================================
# Action Mask Tests
# ============================================================================

class TestActionMask:
    """Test legal action masks."""

    def test_fresh_board_allows_reveal_and_flag(self, env: MinefieldEnv) -> None:
        """Every hidden cell can be revealed or flagged, nothing chorded."""
        mask = env.get_action_mask()
        assert mask.dtype == np.int8
        assert mask[:81].all()
        assert mask[81:162].all()
        assert not mask[162:].any()

    def test_flagged_cell_cannot_be_revealed(self, small_env: MinefieldEnv) -> None:
        """Flags remove the reveal action but keep the flag toggle."""
        small_env.step(small_env.encode_action(ActionType.FLAG, 1, 1))
        mask = small_env.get_action_mask()
        assert mask[small_env.encode_action(ActionType.REVEAL, 1, 1)] == 0
        assert mask[small_env.encode_action(ActionType.FLAG, 1, 1)] == 1

    def test_satisfied_number_can_be_chorded(self, small_env: MinefieldEnv) -> None:
        """A revealed number with matching flags allows a chord."""
        small_env.step(small_env.encode_action(ActionType.REVEAL, 0, 0))
        assert small_env.get_action_mask()[
            small_env.encode_action(ActionType.CHORD, 0, 0)
        ] == 0
        small_env.step(small_env.encode_action(ActionType.FLAG, 1, 1))
        assert small_env.get_action_mask()[
            small_env.encode_action(ActionType.CHORD, 0, 0)
        ] == 1

    def test_finished_game_has_empty_mask(self, small_env: MinefieldEnv) -> None:
        """No actions remain after the game ends."""
        small_env.step(small_env.encode_action(ActionType.REVEAL, 1, 1))
        assert not small_env.get_action_mask().any()


# ============================================================================
# Render Tests
# ============================================================================

class TestRender:
    """Test environment rendering."""

    def test_ansi_render(self, small_env: MinefieldEnv) -> None:
        """ANSI mode returns the board and status line."""
        small_env.step(small_env.encode_action(ActionType.REVEAL, 0, 0))
        text = small_env.render()
        assert text == "1 . .\n. . .\n. . .\nPLAYING | mines left: 1"

    def test_no_render_mode_returns_none(self, env: MinefieldEnv) -> None:
        """Without a render mode nothing is drawn."""
        assert env.render() is None
