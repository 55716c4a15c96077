from typing import List


class Tab:
    def __init__(self, prefix, window_id, tab_id, title, url, fav_icon_url=None):
        self.prefix = prefix
        self.window_id = window_id
        self.tab_id = tab_id
        self.title = title or ''
        self.url = url or ''
        self.fav_icon_url = fav_icon_url or None

    @property
    def id(self):
        return '{prefix}.{window_id}.{tab_id}'.format(
            prefix=self.prefix,
            window_id=self.window_id,
            tab_id=self.tab_id,
        )

    @property
    def window(self):
        return '{prefix}.{window_id}'.format(
            prefix=self.prefix,
            window_id=self.window_id,
        )

    @property
    def line(self):
        return '{id}\t{title}\t{url}'.format(
            id=self.id,
            title=self.title,
            url=self.url,
        )

    def __eq__(self, other):
        return hash(self) == hash(other)

    def __hash__(self):
        return hash(self.line)

    def __repr__(self):
        return self.line

    @staticmethod
    def from_line(line):
        """
        Parse "<prefix>.<window_id>.<tab_id>\t<title>\t<url>[\t<favicon>]".
        """
        parts = line.split('\t')
        if len(parts) < 3:
            raise ValueError('Malformed tab line: %r' % line)
        ids, title, url = parts[:3]
        fav_icon_url = parts[3] if len(parts) > 3 else None
        prefix, window_id, tab_id = ids.split('.')
        return Tab(prefix, int(window_id), int(tab_id), title, url, fav_icon_url)


def parse_tab_lines(tab_lines) -> List[Tab]:
    return [Tab.from_line(line) for line in tab_lines if line.strip()]


def iter_window_tabs(tabs: List[Tab]):
    """Yield (window, tabs) pairs, windows in order of first appearance."""
    windows = {}
    for tab in tabs:
        windows.setdefault(tab.window, []).append(tab)
    yield from windows.items()
