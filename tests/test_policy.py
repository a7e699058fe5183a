"""Tests for the community posting policy and its ban ladder."""

import tempfile
from datetime import datetime, timedelta, timezone

import pytest

from soulsync.community.policy import BAN_LADDER, BURST_LIMIT, PostingPolicy, duration_for_strike
from soulsync.community.store import PostStore
from soulsync.users.models import BanState
from soulsync.users.store import UserStore

T0 = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def _setup(tmpdir):
    users = UserStore(base_dir=tmpdir)
    posts = PostStore(base_dir=tmpdir)
    user, _ = users.register_device("device-1", "college", "B.Com", "girl")
    return users, posts, PostingPolicy(users, posts), user


def _burst(policy, user_id, start, count=BURST_LIMIT):
    return [policy.submit(user_id, f"post {i}", now=start + timedelta(seconds=i)) for i in range(count)]


def test_ladder():
    assert duration_for_strike(1) == timedelta(minutes=5)
    assert duration_for_strike(2) == timedelta(minutes=30)
    assert duration_for_strike(6) == timedelta(days=365)
    assert duration_for_strike(100) == timedelta(days=365)
    assert duration_for_strike(0) == timedelta(minutes=5)
    assert list(BAN_LADDER) == sorted(BAN_LADDER)


def test_fifth_post_in_window_is_spam():
    with tempfile.TemporaryDirectory() as tmpdir:
        users, posts, policy, user = _setup(tmpdir)
        decisions = _burst(policy, user.id, T0)

        assert all(d.admitted for d in decisions[:4])
        last = decisions[4]
        assert not last.admitted
        assert last.spam_detected
        assert last.reason == "Spam detected. You are blocked for 5 minutes."

        state = users.get_ban_state(user.id)
        assert state.strike_count == 1
        assert state.blocked_until == T0 + timedelta(seconds=4) + timedelta(minutes=5)
        assert len(posts.list_posts(now=T0 + timedelta(seconds=5))) == 4


def test_posts_spread_out_are_admitted():
    with tempfile.TemporaryDirectory() as tmpdir:
        users, posts, policy, user = _setup(tmpdir)
        for i in range(8):
            decision = policy.submit(user.id, f"post {i}", now=T0 + timedelta(seconds=5 * i))
            assert decision.admitted, i
        assert users.get_ban_state(user.id).strike_count == 0


def test_active_block_rejects_without_new_strike():
    with tempfile.TemporaryDirectory() as tmpdir:
        users, posts, policy, user = _setup(tmpdir)
        _burst(policy, user.id, T0)

        decision = policy.submit(user.id, "let me in", now=T0 + timedelta(minutes=1))
        assert not decision.admitted
        assert not decision.spam_detected
        assert decision.reason.startswith("You are blocked until")
        assert "Try again in 5 minutes." in decision.reason
        assert users.get_ban_state(user.id).strike_count == 1


def test_block_expires_and_second_burst_escalates():
    with tempfile.TemporaryDirectory() as tmpdir:
        users, posts, policy, user = _setup(tmpdir)
        _burst(policy, user.id, T0)

        later = T0 + timedelta(minutes=10)
        assert policy.submit(user.id, "back again", now=later).admitted

        decisions = _burst(policy, user.id, later + timedelta(minutes=1))
        assert decisions[-1].reason == "Spam detected. You are blocked for 30 minutes."
        state = users.get_ban_state(user.id)
        assert state.strike_count == 2
        assert state.blocked_until - (later + timedelta(minutes=1, seconds=4)) == timedelta(minutes=30)


def test_empty_text_is_an_error():
    with tempfile.TemporaryDirectory() as tmpdir:
        users, posts, policy, user = _setup(tmpdir)
        with pytest.raises(ValueError):
            policy.submit(user.id, "   ", now=T0)
        assert posts.list_posts(now=T0) == []


def test_unknown_user_is_an_error():
    with tempfile.TemporaryDirectory() as tmpdir:
        users, posts, policy, user = _setup(tmpdir)
        with pytest.raises(LookupError):
            policy.submit("nobody", "hello", now=T0)


def test_admitted_post_is_trimmed_and_named():
    with tempfile.TemporaryDirectory() as tmpdir:
        users, posts, policy, user = _setup(tmpdir)
        decision = policy.submit(user.id, "  hello world  ", now=T0)
        assert decision.post.text == "hello world"
        assert decision.post.username == user.username
        assert decision.ban == BanState()


def test_other_users_do_not_count_towards_burst():
    with tempfile.TemporaryDirectory() as tmpdir:
        users, posts, policy, user = _setup(tmpdir)
        other, _ = users.register_device("device-2", "school", "10th", "boy")
        _burst(policy, other.id, T0, count=4)
        assert policy.submit(user.id, "hi", now=T0 + timedelta(seconds=5)).admitted
