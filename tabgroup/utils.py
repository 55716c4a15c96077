import re
from typing import List


def split_tab_ids(string) -> List[str]:
    items = re.split(r'[ \t\r\n,]+', string)
    return list(filter(None, items))


def int_tab_id(tab_id: str) -> int:
    """Convert from str(b.20.123) to int(123)"""
    return int(tab_id.split('.')[-1])


def tab_id_prefix(tab_id: str) -> str:
    """Convert from str(b.20.123) to str(b.)"""
    return tab_id.split('.')[0] + '.'
