"""Test helpers module for shared test utilities.

- constants: exp / ln reference values
- factories: concise FixedDecimal / SignedInt builders
"""

from tests.helpers.constants import EXP_CASES, LN_CASES
from tests.helpers.factories import fx, si
