from unittest import TestCase

from tabgroup.grouping import ORIGIN_DOMAIN
from tabgroup.grouping import ORIGIN_TITLE
from tabgroup.grouping import TabGroup
from tabgroup.grouping import group_by_domain
from tabgroup.grouping import group_by_title
from tabgroup.grouping import group_tabs
from tabgroup.tab import Tab


def make_tabs(*pairs):
    """Tabs a.1.0, a.1.1, ... from (title, url) pairs."""
    return [Tab('a', 1, index, title, url)
            for index, (title, url) in enumerate(pairs)]


class TestGroupByDomain(TestCase):
    def test_buckets_with_two_tabs_are_retained(self):
        tabs = make_tabs(
            ('one', 'https://a.com/1'),
            ('two', 'https://www.a.com/2'),
            ('three', 'https://b.com/1'),
        )
        groups, claimed = group_by_domain(tabs)
        self.assertEqual(1, len(groups))
        self.assertEqual('a.com', groups[0].title)
        self.assertEqual('grey', groups[0].color)
        self.assertEqual(ORIGIN_DOMAIN, groups[0].origin)
        self.assertEqual(['a.1.0', 'a.1.1'], groups[0].tab_ids)
        self.assertEqual(frozenset(['a.1.0', 'a.1.1']), claimed)

    def test_tabs_without_domain_are_skipped(self):
        tabs = make_tabs(('x', 'not a url'), ('y', 'about:blank'))
        groups, claimed = group_by_domain(tabs)
        self.assertEqual([], groups)
        self.assertEqual(frozenset(), claimed)

    def test_domain_order_is_first_appearance(self):
        tabs = make_tabs(
            ('1', 'https://b.com/1'),
            ('2', 'https://a.com/1'),
            ('3', 'https://a.com/2'),
            ('4', 'https://b.com/2'),
        )
        groups, _claimed = group_by_domain(tabs)
        self.assertEqual(['b.com', 'a.com'], [group.title for group in groups])
        self.assertEqual(['a.1.0', 'a.1.3'], groups[0].tab_ids)


class TestGroupByTitle(TestCase):
    def test_keyword_clustering(self):
        tabs = make_tabs(
            ('Rust Guide', 'https://one.org/'),
            ('Learning Rust', 'https://two.org/'),
            ('Go Tutorial', 'https://three.org/'),
        )
        groups = group_by_title(tabs)
        self.assertEqual(1, len(groups))
        self.assertEqual('Rust', groups[0].title)
        self.assertEqual('purple', groups[0].color)
        self.assertEqual(ORIGIN_TITLE, groups[0].origin)
        self.assertEqual(['a.1.0', 'a.1.1'], groups[0].tab_ids)

    def test_excluded_tabs_are_ignored(self):
        tabs = make_tabs(
            ('Rust Guide', 'https://one.org/'),
            ('Learning Rust', 'https://two.org/'),
        )
        self.assertEqual([], group_by_title(tabs, exclude=frozenset(['a.1.0'])))

    def test_substring_match(self):
        tabs = make_tabs(
            ('Python tutorial', 'https://one.org/'),
            ('py cheatsheet', 'https://two.org/'),
        )
        groups = group_by_title(tabs)
        self.assertEqual(['a.1.0', 'a.1.1'], groups[0].tab_ids)

    def test_first_matching_cluster_wins(self):
        tabs = make_tabs(
            ('Rust book', 'https://one.org/'),
            ('Go tour', 'https://two.org/'),
            ('Go blog', 'https://three.org/'),
            ('Rust Go interop', 'https://four.org/'),
        )
        groups = group_by_title(tabs)
        # "Rust Go interop" matches both clusters, the older one takes it
        self.assertEqual([('Rust', ['a.1.0', 'a.1.3']), ('Go', ['a.1.1', 'a.1.2'])],
                         [(group.title, group.tab_ids) for group in groups])

    def test_clusters_can_chain_unrelated_titles(self):
        # only the opening tab contributes keywords: "Go tour" matches via
        # "go" from the first title, although it shares nothing with "Rust tips"
        tabs = make_tabs(
            ('Rust and Go', 'https://one.org/'),
            ('Rust tips', 'https://two.org/'),
            ('Go tour', 'https://three.org/'),
        )
        groups = group_by_title(tabs)
        self.assertEqual(['a.1.0', 'a.1.1', 'a.1.2'], groups[0].tab_ids)

    def test_title_is_most_frequent_keyword(self):
        tabs = make_tabs(
            ('Django forms', 'https://one.org/'),
            ('forms in Flask', 'https://two.org/'),
            ('HTML forms', 'https://three.org/'),
        )
        groups = group_by_title(tabs)
        self.assertEqual('forms', groups[0].title)

    def test_title_ties_go_to_first_keyword(self):
        tabs = make_tabs(
            ('Kafka Streams', 'https://one.org/'),
            ('Kafka Streams API', 'https://two.org/'),
        )
        self.assertEqual('Kafka', group_by_title(tabs)[0].title)

    def test_title_frequency_uses_raw_titles(self):
        # the keyword "Vuejs" comes from "Vue.js" with the dot stripped, so
        # the raw title "Vue.js guide" does not count towards it
        tabs = make_tabs(
            ('Vue.js guide', 'https://one.org/'),
            ('guide to vuejs', 'https://two.org/'),
        )
        groups = group_by_title(tabs)
        self.assertEqual(['a.1.0', 'a.1.1'], groups[0].tab_ids)
        self.assertEqual('guide', groups[0].title)

    def test_cjk_titles(self):
        tabs = make_tabs(
            ('Python教程 - 菜鸟', 'https://one.org/'),
            ('机器学习教程', 'https://two.org/'),
        )
        groups = group_by_title(tabs)
        self.assertEqual(1, len(groups))
        self.assertEqual(['a.1.0', 'a.1.1'], groups[0].tab_ids)
        self.assertEqual('教程', groups[0].title)

    def test_titles_are_lowercased_before_tokenizing(self):
        tabs = make_tabs(
            ('\u212akafka tips', 'https://one.org/'),
            ('kkafka news', 'https://two.org/'),
            ('A\u0130', 'https://three.org/'),
            ('ai', 'https://four.org/'),
        )
        self.assertEqual([('kkafka', ['a.1.0', 'a.1.1']), ('ai', ['a.1.2', 'a.1.3'])],
                         [(group.title, group.tab_ids) for group in group_by_title(tabs)])

    def test_tabs_without_keywords_stay_ungrouped(self):
        tabs = make_tabs(
            ('', 'chrome://newtab/'),
            ('', 'chrome://settings/'),
            ('?!', 'about:blank'),
            ('Rust', 'https://one.org/'),
        )
        self.assertEqual([], group_by_title(tabs))


class TestGroupTabs(TestCase):
    def test_empty_input(self):
        self.assertEqual([], group_tabs([]))

    def test_single_tab(self):
        self.assertEqual([], group_tabs(make_tabs(('Rust', 'https://a.com/'))))

    def test_domain_priority(self):
        tabs = make_tabs(
            ('Weather today', 'https://a.com/1'),
            ('Stock prices', 'https://a.com/2'),
            ('Recipes', 'https://b.com/1'),
        )
        groups = group_tabs(tabs)
        self.assertEqual(1, len(groups))
        self.assertEqual('a.com', groups[0].title)
        self.assertEqual(['a.1.0', 'a.1.1'], groups[0].tab_ids)

    def test_domain_groups_come_before_title_groups(self):
        tabs = make_tabs(
            ('Rust Guide', 'https://rust-guide.dev/'),
            ('Issue 1', 'https://github.com/a/b/issues/1'),
            ('Learning Rust', 'https://learning.org/rust'),
            ('Issue 2', 'https://github.com/a/b/issues/2'),
        )
        groups = group_tabs(tabs)
        self.assertEqual([('github.com', ORIGIN_DOMAIN), ('Rust', ORIGIN_TITLE)],
                         [(group.title, group.origin) for group in groups])

    def test_singleton_domain_tabs_reach_title_grouping(self):
        tabs = make_tabs(
            ('Rust Guide', 'https://rust-guide.dev/'),
            ('Rust Issue', 'https://github.com/rust-lang/rust/issues/1'),
        )
        groups = group_tabs(tabs)
        self.assertEqual(1, len(groups))
        self.assertEqual(ORIGIN_TITLE, groups[0].origin)

    def test_domain_claimed_tabs_do_not_join_title_groups(self):
        tabs = make_tabs(
            ('Rust Guide', 'https://a.com/1'),
            ('Rust Book', 'https://a.com/2'),
            ('Learning Rust', 'https://b.com/1'),
        )
        groups = group_tabs(tabs)
        self.assertEqual(1, len(groups))
        self.assertEqual('a.com', groups[0].title)

    def test_tab_ids_are_disjoint(self):
        tabs = make_tabs(
            ('Rust Guide', 'https://a.com/1'),
            ('Rust Book', 'https://a.com/2'),
            ('Learning Rust', 'https://b.com/1'),
            ('Rust tips', 'https://c.com/1'),
            ('Go tour', 'https://d.com/1'),
            ('Go blog', 'https://e.com/1'),
            ('', 'not a url'),
        )
        ids = [tab_id for group in group_tabs(tabs) for tab_id in group.tab_ids]
        self.assertEqual(len(ids), len(set(ids)))

    def test_running_twice_gives_same_groups(self):
        tabs = make_tabs(
            ('Rust Guide', 'https://a.com/1'),
            ('Learning Rust', 'https://b.com/1'),
            ('Rust tips', 'https://c.com/1'),
            ('Other', 'https://a.com/2'),
        )
        self.assertEqual(group_tabs(tabs), group_tabs(tabs))

    def test_groups_are_collapsed_by_default(self):
        tabs = make_tabs(('1', 'https://a.com/1'), ('2', 'https://a.com/2'))
        self.assertTrue(group_tabs(tabs)[0].collapsed)


class TestTabGroup(TestCase):
    def setUp(self):
        self.tabs = make_tabs(('Rust Guide', 'https://a.com/1'), ('Learning Rust', 'https://a.com/2'))
        self.group = TabGroup('a.com', self.tabs, 'grey', ORIGIN_DOMAIN)

    def test_line(self):
        self.assertEqual('a.com\tgrey\tdomain\ta.1.0 a.1.1', self.group.line)

    def test_edited_returns_new_group(self):
        edited = self.group.edited(title='Work', color='blue')
        self.assertEqual('Work', edited.title)
        self.assertEqual('blue', edited.color)
        self.assertEqual('a.com', self.group.title)
        self.assertEqual(self.group.tab_ids, edited.tab_ids)

    def test_from_line(self):
        tabs_by_id = {tab.id: tab for tab in self.tabs}
        group = TabGroup.from_line('Work\t#1E88E5\tdomain\ta.1.1', tabs_by_id)
        self.assertEqual('Work', group.title)
        self.assertEqual('blue', group.color)
        self.assertEqual(['a.1.1'], group.tab_ids)

    def test_from_line_unknown_color_is_grey(self):
        tabs_by_id = {tab.id: tab for tab in self.tabs}
        group = TabGroup.from_line('Work\tmagenta\tdomain\ta.1.1', tabs_by_id)
        self.assertEqual('grey', group.color)

    def test_from_line_rejects_unknown_tabs(self):
        with self.assertRaises(ValueError):
            TabGroup.from_line('Work\tblue\tdomain\ta.1.9', {})

    def test_from_line_rejects_missing_fields(self):
        with self.assertRaises(ValueError):
            TabGroup.from_line('Work blue', {})
