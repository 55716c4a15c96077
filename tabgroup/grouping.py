"""
This module turns a list of tabs into tab groups.

Tabs are grouped by registrable domain first. Tabs that did not end up in a
domain group with at least one other tab are then clustered by title
keywords. Output order is: domain groups in the order their domain was first
seen, then title groups in the order their cluster was opened. The result
depends on the input order and is deterministic for a given input.
"""
import logging
from typing import Dict
from typing import FrozenSet
from typing import Iterable
from typing import List
from typing import Tuple

from tabgroup.const import DEFAULT_COLLAPSED
from tabgroup.const import DOMAIN_GROUP_COLOR
from tabgroup.const import MIN_GROUP_SIZE
from tabgroup.const import TITLE_GROUP_COLOR
from tabgroup.colors import parse_color
from tabgroup.domain import get_domain
from tabgroup.keywords import keywords
from tabgroup.keywords import keywords_match
from tabgroup.tab import Tab

logger = logging.getLogger('tabgroup')

ORIGIN_DOMAIN = 'domain'
ORIGIN_TITLE = 'title'


class TabGroup:
    def __init__(self, title: str, tabs: List[Tab], color: str, origin: str,
                 collapsed: bool = DEFAULT_COLLAPSED):
        self.title = title
        self.tabs = tuple(tabs)
        self.color = color
        self.origin = origin
        self.collapsed = collapsed

    @property
    def tab_ids(self) -> List[str]:
        return [tab.id for tab in self.tabs]

    @property
    def line(self):
        return '{title}\t{color}\t{origin}\t{tab_ids}'.format(
            title=self.title,
            color=self.color,
            origin=self.origin,
            tab_ids=' '.join(self.tab_ids),
        )

    def edited(self, title=None, color=None, collapsed=None) -> 'TabGroup':
        return TabGroup(
            self.title if title is None else title,
            self.tabs,
            self.color if color is None else color,
            self.origin,
            self.collapsed if collapsed is None else collapsed,
        )

    def _key(self):
        return self.title, self.tab_ids, self.color, self.origin, self.collapsed

    def __eq__(self, other):
        return isinstance(other, TabGroup) and self._key() == other._key()

    def __repr__(self):
        return self.line

    @staticmethod
    def from_line(line: str, tabs_by_id: Dict[str, Tab]) -> 'TabGroup':
        """
        Parse a line produced by TabGroup.line, possibly edited by a user.
        The color can be a tag or a hex value.
        """
        parts = line.split('\t')
        if len(parts) != 4:
            raise ValueError('Expected 4 tab-separated fields: %r' % line)
        title, color, origin, tab_ids = parts
        unknown = [tab_id for tab_id in tab_ids.split() if tab_id not in tabs_by_id]
        if unknown:
            raise ValueError('Unknown tab ids %s in line: %r' % (unknown, line))
        tabs = [tabs_by_id[tab_id] for tab_id in tab_ids.split()]
        return TabGroup(title.strip(), tabs, parse_color(color), origin.strip())


class _Cluster:
    def __init__(self, tab: Tab, keywords: List[str]):
        self.keywords = keywords
        self.tabs = [tab]

    def matches(self, words: Iterable[str]) -> bool:
        return any(keywords_match(word, keyword)
                   for word in words
                   for keyword in self.keywords)

    def most_frequent_keyword(self) -> str:
        """
        Keyword contained in the most tab titles. Earlier keywords win ties.
        """
        titles = [tab.title.lower() for tab in self.tabs]
        best, best_count = self.keywords[0], 0
        for keyword in self.keywords:
            count = sum(1 for title in titles if keyword.lower() in title)
            if count > best_count:
                best, best_count = keyword, count
        return best


def group_by_domain(tabs: List[Tab]) -> Tuple[List[TabGroup], FrozenSet[str]]:
    """
    Return domain groups with at least MIN_GROUP_SIZE tabs, and the ids of
    the tabs they claim. Tabs without a domain are skipped.
    """
    buckets: Dict[str, List[Tab]] = {}
    for tab in tabs:
        domain = get_domain(tab.url)
        if not domain:
            continue
        buckets.setdefault(domain, []).append(tab)

    groups = [TabGroup(domain, bucket, DOMAIN_GROUP_COLOR, ORIGIN_DOMAIN)
              for domain, bucket in buckets.items()
              if len(bucket) >= MIN_GROUP_SIZE]
    claimed = frozenset(tab.id for group in groups for tab in group.tabs)
    return groups, claimed


def group_by_title(tabs: List[Tab], exclude: FrozenSet[str] = frozenset()) -> List[TabGroup]:
    """
    Cluster tabs by shared title keywords.

    A tab joins the first cluster (in creation order) where any of its
    keywords matches any of the cluster keywords, otherwise it opens a new
    cluster. Only the opening tab contributes keywords, so clusters can chain
    tabs that share nothing pairwise.
    """
    clusters: List[_Cluster] = []
    for tab in tabs:
        if tab.id in exclude:
            continue
        words = keywords(tab.title)
        for cluster in clusters:
            if cluster.matches(words):
                cluster.tabs.append(tab)
                break
        else:
            clusters.append(_Cluster(tab, words))

    return [TabGroup(cluster.most_frequent_keyword(), cluster.tabs,
                     TITLE_GROUP_COLOR, ORIGIN_TITLE)
            for cluster in clusters
            if len(cluster.tabs) >= MIN_GROUP_SIZE]


def group_tabs(tabs: List[Tab]) -> List[TabGroup]:
    domain_groups, claimed = group_by_domain(tabs)
    title_groups = group_by_title(tabs, exclude=claimed)
    logger.info('Grouped %s tabs: %s domain groups, %s title groups',
                len(tabs), len(domain_groups), len(title_groups))
    return domain_groups + title_groups
