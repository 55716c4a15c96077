"""
Keyword extraction from tab titles.

Titles are split into segments of CJK ideographs and ASCII letters/digits.
Every segment is then re-split by script, so "abc中文123" gives the tokens
"中文", "abc" and "123". Other scripts act as separators.
"""
import re
from typing import List

from tabgroup.const import TITLE_PUNCTUATION

CJK = '\u4e00-\u9fa5'
ALNUM = 'A-Za-z0-9'

RE_PUNCTUATION = re.compile('[%s]' % re.escape(TITLE_PUNCTUATION))
RE_SEGMENT = re.compile('[%s%s]+' % (CJK, ALNUM))
RE_CJK_RUN = re.compile('[%s]+' % CJK)
RE_ALNUM_RUN = re.compile('[%s]+' % ALNUM)

MIN_TOKEN_LENGTH = 2


def normalize_title(title: str, keep_case=False) -> str:
    title = title or ''
    if not keep_case:
        title = title.lower()
    return RE_PUNCTUATION.sub('', title)


def split_segments(title: str) -> List[str]:
    return [segment for segment in RE_SEGMENT.findall(title)
            if len(segment) >= MIN_TOKEN_LENGTH]


def split_scripts(segment: str) -> List[str]:
    return RE_CJK_RUN.findall(segment) + RE_ALNUM_RUN.findall(segment)


def tokenize(title: str, keep_case=False) -> List[str]:
    """
    Return tokens of a title in order of appearance, duplicates included.

    Tokens are lower-cased unless keep_case is set, in which case they keep
    the casing they have in the title.
    """
    tokens = []
    for segment in split_segments(normalize_title(title, keep_case)):
        tokens.extend(split_scripts(segment))
    return [token for token in tokens if len(token) >= MIN_TOKEN_LENGTH]


def keywords(title: str) -> List[str]:
    """
    Distinct tokens of a title, first occurrence wins.

    Tokens come from the lower-cased title. Each one is shown in the casing
    it has in the title when the title contains it verbatim, otherwise it
    stays lower-cased (e.g. the Kelvin sign lower-cases to an ASCII "k").
    """
    casing = {}
    for token in tokenize(title, keep_case=True):
        casing.setdefault(token.lower(), token)
    seen = set()
    result = []
    for token in tokenize(title):
        if token in seen:
            continue
        seen.add(token)
        result.append(casing.get(token, token))
    return result


def keywords_match(left: str, right: str) -> bool:
    """Equal, or either one is a substring of the other (ignoring case)."""
    left, right = left.lower(), right.lower()
    return left in right or right in left
