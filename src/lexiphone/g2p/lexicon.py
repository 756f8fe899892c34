"""Dictionary-driven word pronunciation.

Resolves one token to phonemes using, in order:
1. A table of special cases (function words whose reading depends on the
   tag or on the following word)
2. Gold then silver dictionary lookup, with capitalization folding
3. Suffix stemming (plural/possessive, past tense, gerund)
4. Letter-by-letter spelling for acronyms and initialisms
5. Numeral and currency reading

Every result is a ``(phonemes, rating)`` pair; ``(None, None)`` means the
word is unknown and is left for the fallback.
"""
from __future__ import annotations

import logging
import re
import unicodedata
from typing import Callable, List, Optional, Tuple

from lexiphone.data.dictionaries import Dictionaries, parent_tag
from lexiphone.g2p.numbers import (
    Num2WordsVerbalizer,
    NumberVerbalizer,
    is_currency_amount,
    is_digit,
    is_number,
    numeric_if_needed,
)
from lexiphone.g2p.stress import apply_stress
from lexiphone.g2p.tokens import MToken, TokenContext
from lexiphone.utils.constants import (
    ADD_SYMBOLS,
    CAP_STRESSES,
    CURRENCIES,
    DOUBLED_ING_PATTERN,
    LEXICON_ORDS,
    NUMBER_SUFFIX_PATTERN,
    ORDINALS,
    PRIMARY_STRESS,
    SECONDARY_STRESS,
    SYMBOLS,
    US_TAUS,
    VERSUS_PATTERN,
)

logger = logging.getLogger(__name__)

Lookup = Tuple[Optional[str], Optional[int]]

_NOT_FOUND: Lookup = (None, None)


class Lexicon:
    """Gold/silver dictionary lookup with morphology and numerals.

    Args:
        dictionaries: Immutable gold/silver snapshot. Its locale decides the
            British/American inflection rules.
        verbalizer: Strategy turning numbers into words
            (default: Num2WordsVerbalizer).

    Example:
        >>> lexicon = Lexicon(load_dictionaries())
        >>> lexicon.get_word("cats", "NNS", None, TokenContext())
        ('kˈæts', 3)
    """

    def __init__(
        self,
        dictionaries: Dictionaries,
        verbalizer: Optional[NumberVerbalizer] = None,
    ):
        self.dictionaries = dictionaries
        self.british = dictionaries.british
        self.golds = dictionaries.golds
        self.silvers = dictionaries.silvers
        self.cap_stresses = CAP_STRESSES
        self.verbalizer = verbalizer if verbalizer is not None else Num2WordsVerbalizer()

    def _gold(self, word: str, tag: Optional[str] = None) -> Optional[str]:
        entry = self.golds.get(word)
        return entry.resolve(tag) if entry is not None else None

    # -------------------------------------------------------------------------
    # Proper nouns and special cases
    # -------------------------------------------------------------------------

    def get_nnp(self, word: str) -> Lookup:
        """Spell a word letter by letter with exactly one primary stress.

        Example:
            >>> lexicon.get_nnp("NHS")
            ('ˌɛnˌAʧˈɛs', 3)
        """
        letters = [self._gold(c.upper()) for c in word if c.isalpha()]
        if not letters or None in letters:
            return _NOT_FOUND
        ps = apply_stress("".join(letters), 0)
        head, sep, tail = ps.rpartition(SECONDARY_STRESS)
        if sep:
            ps = head + PRIMARY_STRESS + tail
        else:
            ps = apply_stress(ps, 2)
        return ps, 3

    def get_special_case(
        self,
        word: str,
        tag: Optional[str],
        stress: Optional[float],
        ctx: Optional[TokenContext],
    ) -> Lookup:
        """Readings of high-frequency words that depend on tag or context."""
        ctx = ctx if ctx is not None else TokenContext()
        tag = tag or ""
        if tag == "ADD" and word in ADD_SYMBOLS:
            return self.lookup(ADD_SYMBOLS[word], None, -0.5, ctx)
        if word in SYMBOLS:
            return self.lookup(SYMBOLS[word], None, None, ctx)
        if (
            "." in word.strip(".")
            and word.replace(".", "").isalpha()
            and len(max(word.split("."), key=len)) < 3
        ):
            return self.get_nnp(word)
        if word in ("a", "A"):
            return ("ɐ" if tag == "DT" else "ˈA"), 4
        if word in ("am", "Am", "AM"):
            if tag.startswith("NN"):
                return self.get_nnp(word)
            if ctx.future_vowel is None or word != "am" or (stress is not None and stress > 0):
                return self._found(self._gold("am"))
            return "ɐm", 4
        if word in ("an", "An", "AN"):
            if word == "AN" and tag.startswith("NN"):
                return self.get_nnp(word)
            return "ɐn", 4
        if word == "I" and tag == "PRP":
            return SECONDARY_STRESS + "I", 4
        if word in ("by", "By", "BY") and parent_tag(tag) == "ADV":
            return "bˈI", 4
        if word in ("to", "To") or (word == "TO" and tag in ("TO", "IN")):
            if ctx.future_vowel is None:
                return self._found(self._gold("to"))
            return ("tʊ" if ctx.future_vowel else "tə"), 4
        if word in ("in", "In") or (word == "IN" and tag != "NNP"):
            mark = PRIMARY_STRESS if ctx.future_vowel is None or tag != "IN" else ""
            return mark + "ɪn", 4
        if word in ("the", "The") or (word == "THE" and tag == "DT"):
            return ("ði" if ctx.future_vowel is True else "ðə"), 4
        if tag == "IN" and VERSUS_PATTERN.match(word):
            return self.lookup("versus", None, None, ctx)
        if word in ("used", "Used", "USED"):
            if tag in ("VBD", "JJ") and ctx.future_to:
                return self._found(self._gold("used", "VBD"))
            return self._found(self._gold("used"))
        return _NOT_FOUND

    @staticmethod
    def _found(ps: Optional[str]) -> Lookup:
        return (ps, 4) if ps is not None else _NOT_FOUND

    # -------------------------------------------------------------------------
    # Dictionary lookup
    # -------------------------------------------------------------------------

    def is_known(self, word: str, tag: Optional[str]) -> bool:
        """Whether lookup() can produce phonemes for ``word``.

        Besides dictionary keys and symbols, any single ASCII letter and any
        word whose tail is all caps (an acronym to spell) counts as known.
        """
        if word in self.golds or word in SYMBOLS or word in self.silvers:
            return True
        if not word.isalpha() or not all(ord(c) in LEXICON_ORDS for c in word):
            return False
        if len(word) == 1:
            return True
        if word == word.upper() and word.lower() in self.golds:
            return True
        return word[1:] == word[1:].upper()

    def lookup(
        self,
        word: str,
        tag: Optional[str],
        stress: Optional[float],
        ctx: Optional[TokenContext],
        spell: bool = True,
    ) -> Lookup:
        """Look a word up in gold (rating 4) then silver (rating 3).

        All-caps words missing from gold are folded to lowercase; with a
        proper-noun tag they skip silver and are spelled out unless the gold
        reading already carries primary stress. With ``spell=False`` only
        dictionary hits are returned.
        """
        is_nnp = None
        if word == word.upper() and word not in self.golds:
            word = word.lower()
            is_nnp = tag == "NNP"
        entry, rating = self.golds.get(word), 4
        if entry is None and not is_nnp:
            entry, rating = self.silvers.get(word), 3
        unknown_context = ctx is not None and ctx.future_vowel is None
        ps = entry.resolve(tag, unknown_context) if entry is not None else None
        if spell and (ps is None or (is_nnp and PRIMARY_STRESS not in ps)):
            nnp_ps, nnp_rating = self.get_nnp(word)
            if nnp_ps is not None:
                return apply_stress(nnp_ps, stress), nnp_rating
        if ps is None:
            return _NOT_FOUND
        return apply_stress(ps, stress), rating

    # -------------------------------------------------------------------------
    # Suffix stemming
    # -------------------------------------------------------------------------

    @staticmethod
    def _stemmed(ps: Optional[str]) -> Lookup:
        # Inflected forms are derived, never exact matches
        return (ps, 3) if ps else _NOT_FOUND

    def _s(self, stem: Optional[str]) -> Optional[str]:
        if not stem:
            return None
        if stem[-1] in "ptkfθ":
            return stem + "s"
        if stem[-1] in "szʃʒʧʤ":
            return stem + ("ɪ" if self.british else "ᵻ") + "z"
        return stem + "z"

    def stem_s(
        self,
        word: str,
        tag: Optional[str],
        stress: Optional[float],
        ctx: Optional[TokenContext],
    ) -> Lookup:
        """Plural/possessive: look up the stem, then add s/z/ᵻz."""
        if len(word) < 3 or not word.endswith("s"):
            return _NOT_FOUND
        if not word.endswith("ss") and self.is_known(word[:-1], tag):
            stem = word[:-1]
        elif (
            word.endswith("'s") or (len(word) > 4 and word.endswith("es") and not word.endswith("ies"))
        ) and self.is_known(word[:-2], tag):
            stem = word[:-2]
        elif len(word) > 4 and word.endswith("ies") and self.is_known(word[:-3] + "y", tag):
            stem = word[:-3] + "y"
        else:
            return _NOT_FOUND
        return self._stemmed(self._s(self.lookup(stem, tag, stress, ctx)[0]))

    def _ed(self, stem: Optional[str]) -> Optional[str]:
        if not stem:
            return None
        if stem[-1] in "pkfθʃsʧ":
            return stem + "t"
        if stem[-1] == "d":
            return stem + ("ɪ" if self.british else "ᵻ") + "d"
        if stem[-1] != "t":
            return stem + "d"
        if self.british or len(stem) < 2:
            return stem + "ɪd"
        if stem[-2] in US_TAUS:
            return stem[:-1] + "ɾᵻd"
        return stem + "ᵻd"

    def stem_ed(
        self,
        word: str,
        tag: Optional[str],
        stress: Optional[float],
        ctx: Optional[TokenContext],
    ) -> Lookup:
        """Past tense: look up the stem, then add t/d/ᵻd (flapped in US English)."""
        if len(word) < 4 or not word.endswith("d"):
            return _NOT_FOUND
        if not word.endswith("dd") and self.is_known(word[:-1], tag):
            stem = word[:-1]
        elif (
            len(word) > 4
            and word.endswith("ed")
            and not word.endswith("eed")
            and self.is_known(word[:-2], tag)
        ):
            stem = word[:-2]
        else:
            return _NOT_FOUND
        return self._stemmed(self._ed(self.lookup(stem, tag, stress, ctx)[0]))

    def _ing(self, stem: Optional[str]) -> Optional[str]:
        if not stem:
            return None
        if self.british:
            if stem[-1] in "əː":
                return None
        elif len(stem) > 1 and stem[-1] == "t" and stem[-2] in US_TAUS:
            return stem[:-1] + "ɾɪŋ"
        return stem + "ɪŋ"

    def stem_ing(
        self,
        word: str,
        tag: Optional[str],
        stress: Optional[float],
        ctx: Optional[TokenContext],
    ) -> Lookup:
        """Gerund: strip -ing (restoring a silent e or undoubling), then add ɪŋ."""
        if len(word) < 5 or not word.endswith("ing"):
            return _NOT_FOUND
        if len(word) > 5 and self.is_known(word[:-3], tag):
            stem = word[:-3]
        elif self.is_known(word[:-3] + "e", tag):
            stem = word[:-3] + "e"
        elif (
            len(word) > 5
            and DOUBLED_ING_PATTERN.search(word)
            and self.is_known(word[:-4], tag)
        ):
            stem = word[:-4]
        else:
            return _NOT_FOUND
        return self._stemmed(self._ing(self.lookup(stem, tag, stress, ctx)[0]))

    # -------------------------------------------------------------------------
    # Words
    # -------------------------------------------------------------------------

    def _stemmers(self) -> Tuple[Callable[..., Lookup], ...]:
        return (self.stem_s, self.stem_ed, self.stem_ing)

    def get_word(
        self,
        word: str,
        tag: Optional[str],
        stress: Optional[float],
        ctx: TokenContext,
    ) -> Lookup:
        """Resolve a (non-numeric) word to ``(phonemes, rating)``."""
        ps, rating = self.get_special_case(word, tag, stress, ctx)
        if ps is not None:
            return ps, rating

        wl = word.lower()
        if (
            len(word) > 1
            and word.replace("'", "").isalpha()
            and word != wl
            and (tag != "NNP" or len(word) > 7)
            and word not in self.golds
            and word not in self.silvers
            and (word == word.upper() or word[1:] == word[1:].lower())
            and (
                wl in self.golds
                or wl in self.silvers
                or any(fn(wl, tag, stress, ctx)[0] for fn in self._stemmers())
            )
        ):
            word = wl

        if self.is_known(word, tag):
            return self.lookup(word, tag, stress, ctx)
        if word.endswith("s'") and self.is_known(word[:-2] + "'s", tag):
            return self.lookup(word[:-2] + "'s", tag, stress, ctx)
        if word.endswith("'") and self.is_known(word[:-1], tag):
            return self.lookup(word[:-1], tag, stress, ctx)

        ps, rating = self.stem_s(word, tag, stress, ctx)
        if ps is not None:
            return ps, rating
        ps, rating = self.stem_ed(word, tag, stress, ctx)
        if ps is not None:
            return ps, rating
        ps, rating = self.stem_ing(word, tag, 0.5 if stress is None else stress, ctx)
        if ps is not None:
            return ps, rating
        return _NOT_FOUND

    # -------------------------------------------------------------------------
    # Numbers and currency
    # -------------------------------------------------------------------------

    def get_number(
        self,
        word: str,
        currency: Optional[str],
        is_head: bool,
        num_flags: str,
    ) -> Lookup:
        """Read a numeric word aloud.

        Handles ordinals ("21st"), years ("1984"), digit runs inside
        clusters, decimals, money amounts with a currency symbol, a leading
        minus and a trailing plural/past/gerund suffix ("1980s").

        Returns ``(None, None)`` if any word of the reading is unknown or the
        verbalizer cannot handle the number.
        """
        try:
            return self._read_number(word, currency, is_head, num_flags)
        except (OverflowError, ValueError, NotImplementedError) as e:
            logger.warning("Could not verbalize number %r: %s", word, e)
            return _NOT_FOUND

    def _read_number(
        self,
        word: str,
        currency: Optional[str],
        is_head: bool,
        num_flags: str,
    ) -> Lookup:
        match = NUMBER_SUFFIX_PATTERN.search(word)
        suffix = match.group() if match else None
        if suffix:
            word = word[: -len(suffix)]
        result: List[Lookup] = []
        if word.startswith("-"):
            result.append(self.lookup("minus", None, None, None, spell=False))
            word = word[1:]

        def extend_num(num, first: bool = True, escape: bool = False) -> None:
            text = num if escape else self.verbalizer.cardinal(int(num))
            splits = [w for w in re.split(r"[^a-z]+", text) if w]
            for i, w in enumerate(splits):
                if w != "and" or "&" in num_flags:
                    if first and i == 0 and len(splits) > 1 and w == "one" and "a" in num_flags:
                        result.append(("ə", 4))
                    else:
                        result.append(
                            self.lookup(w, None, -2 if w == "point" else None, None, spell=False)
                        )
                elif w == "and" and "n" in num_flags and result and result[-1][0] is not None:
                    result[-1] = (result[-1][0] + "ən", result[-1][1])

        if is_digit(word) and suffix in ORDINALS:
            extend_num(self.verbalizer.ordinal(int(word)), escape=True)
        elif not result and len(word) == 4 and currency not in CURRENCIES and is_digit(word):
            extend_num(self.verbalizer.year(int(word)), escape=True)
        elif not is_head and "." not in word:
            num = word.replace(",", "")
            if num[0] == "0" or len(num) > 3:
                for n in num:
                    extend_num(n, first=False)
            elif len(num) == 3 and not num.endswith("00"):
                extend_num(num[0])
                if num[1] == "0":
                    result.append(self.lookup("O", None, -2, None))
                    extend_num(num[2], first=False)
                else:
                    extend_num(num[1:], first=False)
            else:
                extend_num(num)
        elif word.count(".") > 1 or not is_head:
            first = True
            for num in word.replace(",", "").split("."):
                if not num:
                    pass
                elif num[0] == "0" or (len(num) != 2 and any(n != "0" for n in num[1:])):
                    for n in num:
                        extend_num(n, first=False)
                else:
                    extend_num(num, first=first)
                first = False
        elif currency in CURRENCIES and is_currency_amount(word):
            amounts = word.replace(",", "").split(".")
            pairs = [(int(num) if num else 0, unit) for num, unit in zip(amounts, CURRENCIES[currency])]
            if len(pairs) > 1:
                if pairs[1][0] == 0:
                    pairs = pairs[:1]
                elif pairs[0][0] == 0:
                    pairs = pairs[1:]
            for i, (num, unit) in enumerate(pairs):
                if i > 0:
                    result.append(self.lookup("and", None, None, None))
                extend_num(num, first=i == 0)
                if abs(num) != 1 and unit != "pence":
                    result.append(self.stem_s(unit + "s", None, None, None))
                else:
                    result.append(self.lookup(unit, None, None, None))
        else:
            if is_digit(word):
                text = self.verbalizer.cardinal(int(word))
            elif "." not in word:
                n = int(word.replace(",", ""))
                text = self.verbalizer.ordinal(n) if suffix in ORDINALS else self.verbalizer.cardinal(n)
            else:
                word = word.replace(",", "")
                if word[0] == ".":
                    text = "point " + " ".join(self.verbalizer.cardinal(int(n)) for n in word[1:])
                else:
                    text = self.verbalizer.decimal(word)
            extend_num(text, escape=True)

        if not result or any(ps is None for ps, _ in result):
            logger.debug("Unresolved word in reading of number %r", word)
            return _NOT_FOUND
        ps = " ".join(p for p, _ in result)
        rating = min(r for _, r in result)
        if suffix in ("s", "'s"):
            return self._s(ps), rating
        if suffix in ("ed", "'d"):
            return self._ed(ps), rating
        if suffix == "ing":
            return self._ing(ps), rating
        return ps, rating

    def append_currency(self, ps: Optional[str], currency: Optional[str]) -> Optional[str]:
        """Append the plural currency unit (e.g. "dollars") to ``ps``."""
        if not currency or ps is None:
            return ps
        units = CURRENCIES.get(currency)
        unit_ps = self.stem_s(units[0] + "s", None, None, None)[0] if units else None
        return f"{ps} {unit_ps}" if unit_ps else ps

    # -------------------------------------------------------------------------
    # Entry point
    # -------------------------------------------------------------------------

    @staticmethod
    def normalize_word(word: str) -> str:
        """Fold curly apostrophes, NFKC-normalize and map exotic digits to ASCII."""
        word = word.replace("‘", "'").replace("’", "'")
        word = unicodedata.normalize("NFKC", word)
        return "".join(numeric_if_needed(c) for c in word)

    def __call__(self, tk: MToken, ctx: TokenContext) -> Lookup:
        """Resolve a token (its alias if set) to ``(phonemes, rating)``."""
        word = self.normalize_word(tk.text if tk.meta.alias is None else tk.meta.alias)
        stress = None if word == word.lower() else self.cap_stresses[int(word == word.upper())]
        ps, rating = self.get_word(word, tk.tag, stress, ctx)
        if ps is not None:
            return apply_stress(self.append_currency(ps, tk.meta.currency), tk.meta.stress), rating
        if is_number(word, tk.meta.is_head):
            ps, rating = self.get_number(word, tk.meta.currency, tk.meta.is_head, tk.meta.num_flags)
            return apply_stress(ps, tk.meta.stress), rating
        if not all(ord(c) in LEXICON_ORDS for c in word):
            return _NOT_FOUND
        if word != word.lower() and (word == word.upper() or word[1:] == word[1:].lower()):
            ps, rating = self.get_word(word.lower(), tk.tag, stress, ctx)
            if ps is not None:
                return apply_stress(self.append_currency(ps, tk.meta.currency), tk.meta.stress), rating
        return _NOT_FOUND
