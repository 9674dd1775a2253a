import glob
import os

import pandas as pd

DATA_DIR = os.path.join(os.path.dirname(__file__), 'data')


def get_data(*paths):
    return os.path.join(DATA_DIR, *paths)


def glob_exists(*pos, strict=False, n=1):
    globexpr = os.path.join(*pos)
    file_list = glob.glob(globexpr)
    if strict and len(file_list) == n:
        return file_list[0] if len(file_list) == 1 else file_list
    elif not strict and len(file_list) > 0:
        return file_list
    else:
        print(globexpr)
        print(file_list)
        return False


def read_output_rows(filename):
    """
    read an output file into a list of rows (dict by column name). All values are read as strings
    """
    df = pd.read_csv(filename, sep='\t', dtype=str, keep_default_na=False)
    df.columns = [c[1:] if c.startswith('#') else c for c in df.columns]
    return df.to_dict('records')
