"""
Tests for header tokenization and similarity metrics.
"""
import pytest

from Mapper.services.semantic_matcher import (
    AbbreviationExpander,
    FieldNameTokenizer,
    TokenSimilarityCalculator,
)


class TestAbbreviationExpander:
    """Test business abbreviation expansion"""

    def setup_method(self):
        self.expander = AbbreviationExpander()

    def test_default_abbreviations(self):
        assert self.expander.expand('qty') == 'quantity'
        assert self.expander.expand('po') == 'purchase order'
        assert self.expander.expand('addr') == 'address'

    def test_case_insensitive(self):
        assert self.expander.expand('QTY') == 'quantity'
        assert self.expander.expand('Amt') == 'amount'

    def test_unknown_token_unchanged(self):
        assert self.expander.expand('widget') == 'widget'
        assert self.expander.expand('id') == 'id'

    def test_empty_token(self):
        assert self.expander.expand('') == ''

    def test_custom_abbreviations(self):
        expander = AbbreviationExpander({'SKU#': 'stock keeping unit', 'pcs': 'pieces'})
        assert expander.expand('pcs') == 'pieces'
        assert expander.expand('qty') == 'quantity'


class TestFieldNameTokenizer:
    """Test header normalization across naming conventions"""

    def setup_method(self):
        self.tokenizer = FieldNameTokenizer()

    @pytest.mark.parametrize("header,expected", [
        ("Item ID", ["item", "id"]),
        ("itemName", ["item", "name"]),
        ("order_date", ["order", "date"]),
        ("Order #", ["order"]),
        ("PONumber", ["purchase", "order", "number"]),
        ("Qty", ["quantity"]),
        ("Total Amt", ["total", "amount"]),
        ("  Point   of contact ", ["point", "of", "contact"]),
        ("address1", ["address", "1"]),
        ("x1", ["1"]),
    ])
    def test_tokenize(self, header, expected):
        assert self.tokenizer.tokenize(header) == expected

    def test_empty_and_none(self):
        assert self.tokenizer.tokenize("") == []
        assert self.tokenizer.tokenize("   ") == []
        assert self.tokenizer.tokenize(None) == []

    def test_unicode_folded(self):
        assert self.tokenizer.tokenize("Catégorie") == ["categorie"]

    def test_non_string_header(self):
        assert self.tokenizer.tokenize(2024) == ["2024"]

    def test_normalize_joins_tokens(self):
        assert self.tokenizer.normalize("Item-Name") == "item name"


class TestTokenSimilarityCalculator:
    """Test the combined similarity metric"""

    def setup_method(self):
        self.calc = TokenSimilarityCalculator()

    def test_identical(self):
        assert self.calc.combined_similarity(["stock"], ["stock"]) == 1.0

    def test_jaccard(self):
        assert self.calc.jaccard_similarity({"unit", "cost"}, {"cost", "price"}) == pytest.approx(1 / 3)
        assert self.calc.jaccard_similarity(set(), {"a"}) == 0.0

    def test_sequence_ignores_spacing(self):
        assert self.calc.sequence_ratio(["stock", "level"], ["stocklevel"]) == 1.0

    def test_combined_blends_both(self):
        # No shared token, identical characters
        assert self.calc.combined_similarity(["stock", "level"], ["stocklevel"]) == 0.5

    def test_near_spelling(self):
        assert self.calc.combined_similarity(["remark"], ["remarks"]) == 0.462

    def test_empty_input(self):
        assert self.calc.combined_similarity([], ["stock"]) == 0.0
