import os
import tempfile


def slurp_lines(filename):
    with open(filename, encoding='utf-8') as file_:
        return [line.rstrip('\r\n') for line in file_.readlines()]


def in_temp_dir(filename) -> str:
    temp_dir = tempfile.gettempdir()
    return os.path.join(temp_dir, filename)
