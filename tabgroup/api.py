import logging
import sys
from functools import partial
from traceback import print_exc
from typing import Dict
from typing import List

import requests

from tabgroup.grouping import TabGroup
from tabgroup.parallel import call_parallel
from tabgroup.tab import Tab
from tabgroup.tab import parse_tab_lines
from tabgroup.utils import int_tab_id
from tabgroup.utils import tab_id_prefix
from tabgroup.wait import ConditionTrue
from tabgroup.wait import Waiter

logger = logging.getLogger('tabgroup')

HTTP_TIMEOUT = 10.0
MAX_NUMBER_OF_TABS = 5000

PROBE_ERRORS = (requests.exceptions.ConnectionError, requests.exceptions.Timeout,
                requests.exceptions.HTTPError)


class HttpClient:
    def __init__(self, host='localhost', port=4635, timeout=HTTP_TIMEOUT):
        self._host: str = host
        self._port: int = port
        self._timeout: float = timeout

    def _url(self, path):
        return 'http://%s:%s%s' % (self._host, self._port, path)

    def get(self, path) -> str:
        url = self._url(path)
        logger.info('GET %s' % url)
        response = requests.get(url, timeout=self._timeout)
        response.raise_for_status()
        return response.text

    def post_json(self, path, payload) -> str:
        url = self._url(path)
        logger.info('POST %s %s' % (url, payload))
        response = requests.post(url, json=payload, timeout=self._timeout)
        response.raise_for_status()
        return response.text


class StartupTimeout(BaseException):
    pass


class SingleMediatorAPI(object):
    """
    This API is designed to work with a single mediator.
    """

    def __init__(self, prefix, host='localhost', port=4635, startup_timeout: float = None, client: HttpClient = None):
        self._prefix = '%s.' % prefix
        self._host = host
        self._port = port
        self._client = HttpClient(host=host, port=port) if client is None else client
        if startup_timeout is not None:
            self.must_ready(timeout=startup_timeout)
        self._pid = self.get_pid()
        self._browser = self.get_browser()

    def must_ready(self, timeout: float) -> None:
        condition = ConditionTrue(lambda: self.get_pid() != -1)
        if not Waiter(condition).wait(timeout=timeout):
            raise StartupTimeout('Failed to start in %s seconds' % timeout)

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def browser(self) -> str:
        return self._browser

    @property
    def ready(self) -> bool:
        return self._browser != '<ERROR>'

    def __str__(self):
        return '%s\t%s:%s\t%s\t%s' % (
            self._prefix, self._host, self._port, self._pid, self._browser)

    def prefix_tab(self, tab):
        return '%s%s' % (self._prefix, tab)

    def prefix_tabs(self, tabs):
        return list(map(self.prefix_tab, tabs))

    def prefix_match(self, tab_id):
        return tab_id.startswith(self._prefix)

    def filter_tab_ids(self, tab_ids):
        return [tab_id for tab_id in tab_ids if self.prefix_match(tab_id)]

    def get_pid(self):
        """Get process ID from the mediator."""
        try:
            return int(self._get('/get_pid'))
        except PROBE_ERRORS as e:
            logger.info('_get_pid failed: %s', e)
        except ValueError as e:
            logger.info('_get_pid returned garbage: %s', e)
        return -1

    def get_browser(self):
        """Get browser name from the mediator."""
        try:
            return self._get('/get_browser')
        except PROBE_ERRORS as e:
            logger.info('_get_browser failed: %s', e)
        return '<ERROR>'

    def list_tabs(self, args):
        num_tabs = MAX_NUMBER_OF_TABS
        if len(args) > 0:
            num_tabs = int(args[0])

        result = self._get('/list_tabs')
        lines = [line for line in result.splitlines() if line][:num_tabs]
        return self.prefix_tabs(lines)

    def list_tabs_safe(self, args, print_error=False):
        args = args or []
        tabs = []
        try:
            tabs = self.list_tabs(args)
        except ValueError as e:
            print("Cannot decode response: %s: %s" % (self, e), file=sys.stderr)
            logger.error("Cannot decode response: %s: %s", self, e)
            if print_error:
                print_exc(file=sys.stderr)
        except requests.exceptions.RequestException as e:
            print("Cannot access API %s: %s" % (self, e), file=sys.stderr)
            logger.error("Cannot access API %s: %s", self, e)
            if print_error:
                print_exc(file=sys.stderr)
        return tabs

    def list_groups(self) -> List[str]:
        result = self._get('/list_groups')
        return self.prefix_tabs(line for line in result.splitlines() if line)

    def group_tabs(self, group: TabGroup) -> str:
        """Create a native tab group, return its browser id."""
        tab_ids = [int_tab_id(tab_id) for tab_id in self.filter_tab_ids(group.tab_ids)]
        logger.info('SingleMediatorAPI: group_tabs: %s %s', group.title, tab_ids)
        payload = {
            'tab_ids': tab_ids,
            'title': group.title,
            'color': group.color,
            'collapsed': group.collapsed,
        }
        return self._post_json('/group_tabs', payload).strip()

    def ungroup_tabs(self, tab_ids: List[str]):
        tab_ids = ','.join(str(int_tab_id(tab_id)) for tab_id in self.filter_tab_ids(tab_ids))
        logger.info('SingleMediatorAPI: ungroup_tabs: %s', tab_ids)
        if not tab_ids:
            return None
        return self._get('/ungroup_tabs/%s' % tab_ids)

    def shutdown(self):
        return self._get('/shutdown')

    def _get(self, path):
        return self._client.get(path)

    def _post_json(self, path, payload):
        return self._client.post_json(path, payload)


class MultipleMediatorsAPI(object):
    """
    This API is designed to work with multiple mediators.
    """

    def __init__(self, apis):
        self._apis = apis

    @property
    def ready_apis(self):
        return [api for api in self._apis if api.ready]

    def list_tabs(self, args, print_error=False) -> List[str]:
        functions = [partial(api.list_tabs_safe, args, print_error)
                     for api in self.ready_apis]
        if not functions:
            return []
        tabs = sum(call_parallel(functions), [])
        return tabs

    def list_tab_records(self) -> List[Tab]:
        return parse_tab_lines(self.list_tabs([]))

    def list_groups(self) -> List[str]:
        groups = []
        for api in self.ready_apis:
            groups.extend(api.list_groups())
        return groups

    def _get_api_by_prefix(self, prefix):
        for api in self._apis:
            if api.prefix == prefix:
                return api
        raise ValueError('No such client with prefix "%s"' % prefix)

    def group_tabs(self, group: TabGroup) -> str:
        """
        Materialize a group. All tabs of a group come from one window and
        therefore from one client.
        """
        prefixes = {tab_id_prefix(tab_id) for tab_id in group.tab_ids}
        if len(prefixes) != 1:
            raise ValueError('Group "%s" spans several clients: %s' % (group.title, sorted(prefixes)))
        api = self._get_api_by_prefix(prefixes.pop())
        group_id = api.group_tabs(group)
        return api.prefix_tab(group_id)

    def ungroup_tabs(self, tab_ids: List[str]) -> Dict[str, str]:
        results = {}
        for api in self.ready_apis:
            if api.filter_tab_ids(tab_ids):
                results[api.prefix] = api.ungroup_tabs(tab_ids)
        return results
