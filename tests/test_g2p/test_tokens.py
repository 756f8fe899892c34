"""Tests for token records and merging."""
from __future__ import annotations

import pytest

from lexiphone.g2p.tokens import Cluster, MToken, TokenMeta, merge_tokens


class TestMToken:
    """Tests for MToken."""

    def test_copy_has_own_meta(self):
        """Should not share metadata with the copy."""
        tk = MToken("cat", "NN", " ")
        other = tk.copy(text="dog")
        other.meta.stress = 2
        assert tk.meta.stress is None
        assert other.text == "dog"
        assert tk.text == "cat"


class TestCluster:
    """Tests for Cluster."""

    def test_text(self):
        """Should join member text without the trailing whitespace."""
        cluster = Cluster([MToken("well", "RB", ""), MToken("-", "HYPH", ""), MToken("known", "VBN", " ")])
        assert cluster.text == "well-known"
        assert len(cluster) == 3
        assert cluster[2].text == "known"


class TestMergeTokens:
    """Tests for merge_tokens."""

    def test_empty(self):
        """Should reject an empty list."""
        with pytest.raises(ValueError):
            merge_tokens([])

    def test_text_and_whitespace(self):
        """Should join text and keep the last token's whitespace."""
        merged = merge_tokens([MToken("ca", "MD", ""), MToken("n't", "RB", " ")])
        assert merged.text == "can't"
        assert merged.whitespace == " "
        assert merged.phonemes is None

    def test_tag_from_heaviest(self):
        """Should take the tag of the token with the most characters."""
        merged = merge_tokens([MToken("e", "NN", ""), MToken("mail", "VB", "")])
        assert merged.tag == "VB"

    def test_phonemes_with_placeholder(self):
        """Should fill unresolved members with the placeholder."""
        merged = merge_tokens(
            [MToken("a", "DT", "", phonemes="ɐ"), MToken("b", "NN", "")],
            unk="?",
        )
        assert merged.phonemes == "ɐ?"

    def test_prespace(self):
        """Should insert a space before prespaced members."""
        merged = merge_tokens(
            [
                MToken("A", "NN", "", phonemes="ˈA"),
                MToken("4", "CD", "", phonemes="fˈɔɹ", meta=TokenMeta(prespace=True)),
            ],
            unk="?",
        )
        assert merged.phonemes == "ˈA fˈɔɹ"

    def test_meta(self):
        """Should combine flags, keep a shared stress and the lowest rating."""
        merged = merge_tokens([
            MToken("1", "CD", "", meta=TokenMeta(num_flags="n", stress=1, rating=4)),
            MToken("2", "CD", "", meta=TokenMeta(num_flags="a&", stress=1, rating=3, is_head=False)),
        ])
        assert merged.meta.num_flags == "&an"
        assert merged.meta.stress == 1
        assert merged.meta.rating == 3
        assert merged.meta.is_head is True

    def test_unrated_member(self):
        """Should leave the rating unset if any member is unrated."""
        merged = merge_tokens([MToken("a", "DT", "", meta=TokenMeta(rating=4)), MToken("b", "NN", "")])
        assert merged.meta.rating is None
