from typing import List

from tabgroup.mediator.log import mediator_logger
from tabgroup.mediator.transport import Transport


class BrowserRemoteAPI:
    """
    Communicates with a browser using stdin/stdout. This mediator is supposed
    to be run by the browser after a request from the helper extension.
    """

    def __init__(self, transport: Transport):
        self._transport: Transport = transport

    def _call(self, command: dict):
        self._transport.send(command)
        return self._transport.recv()

    def list_tabs(self) -> List[str]:
        """
        Lines of "<window_id>.<tab_id>\t<title>\t<url>\t<favIconUrl>".
        """
        return self._call({'name': 'list_tabs'})

    def list_groups(self) -> List[str]:
        """
        Lines of "<group_id>\t<window_id>\t<title>\t<color>\t<collapsed>".
        """
        return self._call({'name': 'list_groups'})

    def group_tabs(self, tab_ids: List[int], title: str, color: str, collapsed: bool):
        """
        Put tabs into a new native group and set its title, color and
        collapsed state. Returns the browser's group id.
        """
        mediator_logger.info('grouping tab ids %s as "%s" (%s, collapsed=%s)',
                             tab_ids, title, color, collapsed)
        command = {
            'name': 'group_tabs',
            'tab_ids': tab_ids,
            'title': title,
            'color': color,
            'collapsed': collapsed,
        }
        return self._call(command)

    def ungroup_tabs(self, tab_ids: str):
        """
        :param tab_ids: Comma-separated list of tab IDs to ungroup.
        """
        int_tab_ids = [int(id_) for id_ in tab_ids.split(',')]
        mediator_logger.info('ungrouping tab ids: %s', int_tab_ids)
        return self._call({'name': 'ungroup_tabs', 'tab_ids': int_tab_ids})

    def get_browser(self):
        mediator_logger.info('getting browser name')
        return self._call({'name': 'get_browser'})


def default_remote_api(transport: Transport) -> BrowserRemoteAPI:
    return BrowserRemoteAPI(transport)
