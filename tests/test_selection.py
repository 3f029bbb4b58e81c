import pytest

from daily_wish.selection import (
    hash_u32,
    selection_key,
    vote_percentages,
    wish_index,
)

WISHES_LENGTH = 33


class TestHash:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("", 0x811C9DC5),
            ("a", 0xE40C292C),
            ("foobar", 0xBF9CF968),
        ],
    )
    def test_known_fnv1a_vectors(self, text, expected):
        assert hash_u32(text) == expected

    def test_deterministic(self):
        assert hash_u32("hello-world") == hash_u32("hello-world")

    @pytest.mark.parametrize("text", ["", "abc", "2024-01-01", "x" * 1000, "üñí", "🎉 wish"])
    def test_uint32_range(self, text):
        assert 0 <= hash_u32(text) <= 0xFFFFFFFF

    def test_distinguishes_similar_inputs(self):
        assert hash_u32("user:1:2024-01-01") != hash_u32("user:2:2024-01-01")

    def test_astral_characters_hash_as_surrogate_pairs(self):
        # U+1F389 is D83C DF89 in UTF-16
        assert hash_u32("\U0001F389") == hash_u32("🎉")


class TestSelectionKey:
    def test_with_identity(self):
        assert selection_key(42, "2024-05-20") == "42:2024-05-20"
        assert selection_key("alice", "2024-05-20") == "alice:2024-05-20"

    def test_without_identity(self):
        assert selection_key(None, "2024-05-20") == "2024-05-20"

    def test_empty_string_is_not_absent(self):
        assert selection_key("", "2024-05-20") == ":2024-05-20"


class TestWishIndex:
    def test_absent_identity_uses_day_only(self):
        assert wish_index(None, "2024-01-01", WISHES_LENGTH) == hash_u32("2024-01-01") % WISHES_LENGTH

    def test_varies_by_identity(self):
        day = "2024-01-02"
        assert wish_index(1, day, WISHES_LENGTH) != wish_index(2, day, WISHES_LENGTH)

    def test_deterministic(self):
        assert wish_index(42, "2024-05-20", WISHES_LENGTH) == wish_index(42, "2024-05-20", WISHES_LENGTH)

    def test_known_index(self):
        # fnv1a32("42:2024-05-20") == 0xB9A51092
        assert wish_index(42, "2024-05-20", WISHES_LENGTH) == 0xB9A51092 % WISHES_LENGTH

    def test_bounded_by_length(self):
        for i in range(50):
            idx = wish_index(i, "2024-06-01", WISHES_LENGTH)
            assert 0 <= idx < WISHES_LENGTH

    def test_numeric_and_string_identity_agree(self):
        assert wish_index(7, "2024-06-01", WISHES_LENGTH) == wish_index("7", "2024-06-01", WISHES_LENGTH)

    @pytest.mark.parametrize("length", [0, -3])
    def test_degenerate_length(self, length):
        assert wish_index(5, "2024-01-01", length) == 0

    def test_spreads_across_list(self):
        hits = {wish_index(fid, "2024-03-15", WISHES_LENGTH) for fid in range(1000)}
        # 1000 draws over 33 slots should touch nearly every slot
        assert len(hits) >= 30

    def test_end_to_end_scenario(self):
        day, length = "2024-01-01", 30
        first = wish_index(12345, day, length)
        assert 0 <= first < length
        assert wish_index(12345, day, length) == first
        other = wish_index(67890, day, length)
        assert 0 <= other < length


class TestVotePercentages:
    def test_zero_votes(self):
        assert vote_percentages(0, 0) == (0, 0, 0)

    def test_all_likes(self):
        assert vote_percentages(4, 0) == (100, 0, 4)

    def test_rounds_half_up(self):
        # 1/8 = 12.5%
        assert vote_percentages(1, 7).likes_pct == 13
        assert vote_percentages(1, 7).dislikes_pct == 87

    def test_thirds(self):
        assert vote_percentages(1, 2) == (33, 67, 3)
        assert vote_percentages(2, 1) == (67, 33, 3)

    def test_pairs_always_sum_to_100(self):
        for likes in range(25):
            for dislikes in range(25):
                if likes + dislikes == 0:
                    continue
                pct = vote_percentages(likes, dislikes)
                assert pct.likes_pct + pct.dislikes_pct == 100
                assert pct.total_votes == likes + dislikes
