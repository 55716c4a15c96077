from unittest import TestCase

from tabgroup.domain import collapse_host
from tabgroup.domain import get_domain


class TestGetDomain(TestCase):
    def test_subdomains_are_collapsed(self):
        self.assertEqual('example.com', get_domain('https://a.b.example.com/x'))

    def test_two_labels_kept_as_is(self):
        self.assertEqual('example.com', get_domain('https://example.com'))

    def test_not_a_url(self):
        self.assertEqual('', get_domain('not a url'))

    def test_empty_string(self):
        self.assertEqual('', get_domain(''))

    def test_host_without_dots(self):
        self.assertEqual('localhost', get_domain('http://localhost:8080/index.html'))

    def test_port_and_case_are_dropped(self):
        self.assertEqual('example.com', get_domain('https://WWW.Example.COM:8443/path?q=1'))

    def test_browser_internal_page(self):
        self.assertEqual('extensions', get_domain('chrome://extensions/'))

    def test_file_url_has_no_domain(self):
        self.assertEqual('', get_domain('file:///home/user/index.html'))

    def test_malformed_ipv6_host(self):
        self.assertEqual('', get_domain('http://[::1/'))

    def test_public_suffix_is_not_consulted(self):
        self.assertEqual('co.uk', get_domain('https://www.bbc.co.uk/news'))


class TestCollapseHost(TestCase):
    def test_collapse(self):
        self.assertEqual('baidu.com', collapse_host('a.baidu.com'))
        self.assertEqual('baidu.com', collapse_host('baidu.com'))
        self.assertEqual('baidu', collapse_host('baidu'))
