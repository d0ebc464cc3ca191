"""
Header Tokenizer and Similarity Metrics

CORE RESPONSIBILITIES:
- Normalize freeform spreadsheet headers into comparable token lists
  (camelCase, snake_case, punctuation, unicode, business abbreviations)
- Score textual similarity between a header and target vocabulary entries

Similarity metric used for suggestions:
    similarity = 0.5 * token Jaccard + 0.5 * character SequenceMatcher ratio
computed on tokenizer-normalized text. Jaccard rewards whole-word overlap
("Unit cost" vs "cost price"), the character ratio rewards near-spellings
("Remark" vs "remarks") that share no exact token.
"""

import re
import logging
import unicodedata
from typing import List, Dict, Set, Optional
from difflib import SequenceMatcher

logger = logging.getLogger(__name__)


class AbbreviationExpander:
    """
    Expands common inventory and order-management abbreviations found in
    spreadsheet headers to their full forms.
    """

    DEFAULT_ABBREVIATIONS = {
        # Quantities and numbers
        'qty': 'quantity',
        'qnty': 'quantity',
        'no': 'number',
        'num': 'number',
        'nbr': 'number',
        'amt': 'amount',
        'tot': 'total',

        # Documents
        'po': 'purchase order',
        'so': 'sales order',
        'inv': 'invoice',
        'ref': 'reference',

        # Entities
        'prod': 'product',
        'cust': 'customer',
        'vend': 'vendor',
        'supp': 'supplier',
        'mfr': 'manufacturer',
        'mfg': 'manufacturer',

        # Attributes
        'desc': 'description',
        'descr': 'description',
        'cat': 'category',
        'addr': 'address',
        'tel': 'telephone',
        'ph': 'phone',
        'loc': 'location',
        'wh': 'warehouse',
        'avail': 'availability',
        'info': 'information',
        'uom': 'unit of measure',
        'dt': 'date',
        'eta': 'estimated arrival',
    }

    def __init__(self, custom_abbreviations: Optional[Dict[str, str]] = None):
        """
        Initialize abbreviation expander with default and optional custom abbreviations.

        Args:
            custom_abbreviations: Optional dict of custom abbreviation mappings
        """
        abbreviations = dict(self.DEFAULT_ABBREVIATIONS)
        if custom_abbreviations:
            abbreviations.update({k.lower(): v.lower() for k, v in custom_abbreviations.items()})
        self._abbreviations = abbreviations

    def expand(self, token: str) -> str:
        """
        Expand an abbreviation to its full form if found, otherwise return original.

        Args:
            token: The token to potentially expand

        Returns:
            Expanded form (may contain spaces) or the original token
        """
        if not token:
            return token
        return self._abbreviations.get(token.lower(), token)


class FieldNameTokenizer:
    """
    Tokenizes header text by handling multiple naming conventions:
    - Spreadsheet text: "Point of contact", "Order #"
    - snake_case: order_date
    - camelCase: itemName, PONumber
    - Numbers: address1
    """

    def __init__(self, abbreviation_expander: Optional[AbbreviationExpander] = None):
        self.expander = abbreviation_expander or AbbreviationExpander()

    def tokenize(self, field_name) -> List[str]:
        """
        Tokenize a header into normalized tokens.

        Process:
        1. Normalize unicode
        2. Split camelCase and consecutive capitals
        3. Split on numbers
        4. Replace every non-alphanumeric character with a space
        5. Lowercase
        6. Expand abbreviations
        7. Drop single-letter tokens (numbers are kept)

        Args:
            field_name: The header to tokenize (non-strings are stringified)

        Returns:
            List of normalized tokens
        """
        if field_name is None:
            return []
        text = str(field_name)
        if not text.strip():
            return []

        normalized = unicodedata.normalize('NFKD', text)
        normalized = normalized.encode('ascii', 'ignore').decode('ascii')

        text = re.sub(r'([a-z])([A-Z])', r'\1 \2', normalized)
        text = re.sub(r'([A-Z]+)([A-Z][a-z])', r'\1 \2', text)

        text = re.sub(r'([a-zA-Z])(\d)', r'\1 \2', text)
        text = re.sub(r'(\d)([a-zA-Z])', r'\1 \2', text)

        text = re.sub(r'[^a-zA-Z0-9]+', ' ', text)

        tokens = []
        for token in text.lower().split():
            tokens.extend(self.expander.expand(token).split())

        tokens = [token for token in tokens if len(token) >= 2 or token.isdigit()]

        logger.debug(f"Tokenized '{field_name}' -> {tokens}")
        return tokens

    def normalize(self, field_name) -> str:
        """Return the header as a single space-joined normalized string."""
        return ' '.join(self.tokenize(field_name))


class TokenSimilarityCalculator:
    """
    Calculates similarity between tokenized header texts.
    """

    TOKEN_WEIGHT = 0.5
    SEQUENCE_WEIGHT = 0.5

    def jaccard_similarity(self, tokens1: Set[str], tokens2: Set[str]) -> float:
        """
        Calculate Jaccard similarity: |intersection| / |union|

        Args:
            tokens1: First set of tokens
            tokens2: Second set of tokens

        Returns:
            Jaccard similarity score (0.0 to 1.0)
        """
        if not tokens1 or not tokens2:
            return 0.0

        union = tokens1 | tokens2
        return len(tokens1 & tokens2) / len(union)

    def sequence_ratio(self, tokens1: List[str], tokens2: List[str]) -> float:
        """
        Character-level SequenceMatcher ratio over the tokens joined
        without separators, so "stocklevel" and "stock level" compare equal.
        """
        text1 = ''.join(tokens1)
        text2 = ''.join(tokens2)
        if not text1 or not text2:
            return 0.0
        return SequenceMatcher(None, text1, text2).ratio()

    def combined_similarity(self, tokens1: List[str], tokens2: List[str]) -> float:
        """
        Weighted blend of Jaccard and sequence similarity, rounded to
        3 decimals so that scores compare stably.

        Args:
            tokens1: Tokens of the first text
            tokens2: Tokens of the second text

        Returns:
            Combined similarity score (0.0 to 1.0)
        """
        if not tokens1 or not tokens2:
            return 0.0

        jaccard = self.jaccard_similarity(set(tokens1), set(tokens2))
        sequence = self.sequence_ratio(tokens1, tokens2)
        combined = (self.TOKEN_WEIGHT * jaccard) + (self.SEQUENCE_WEIGHT * sequence)
        return round(combined, 3)
