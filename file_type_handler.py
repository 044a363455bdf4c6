import os

import pandas as pd

SUPPORTED_EXTENSIONS = (".csv", ".tsv", ".json", ".parquet", ".xlsx", ".h5")


class UnsupportedFileType(ValueError):
    pass


class MissingEngine(RuntimeError):
    pass


class FileTypeHandler:
    def __init__(self, path: str):
        self.path = path
        _, ext = os.path.splitext(path)
        self.ext = ext.lower()

        if self.ext not in SUPPORTED_EXTENSIONS:
            raise UnsupportedFileType(
                f"Unsupported file type (use {', '.join(SUPPORTED_EXTENSIONS)})"
            )

    def load(self) -> pd.DataFrame:
        if not os.path.exists(self.path):
            raise FileNotFoundError(self.path)
        if os.path.getsize(self.path) == 0:
            return pd.DataFrame()

        if self.ext == ".csv":
            return self._read_delimited(",")
        elif self.ext == ".tsv":
            return self._read_delimited("\t")
        elif self.ext == ".json":
            return pd.read_json(self.path)
        elif self.ext == ".parquet":
            self._ensure_parquet_engine()
            return pd.read_parquet(self.path)
        elif self.ext == ".xlsx":
            self._ensure_excel_engine()
            return pd.read_excel(self.path, sheet_name=0)
        return self._load_hdf()

    def _read_delimited(self, sep: str) -> pd.DataFrame:
        try:
            return pd.read_csv(self.path, sep=sep)
        except pd.errors.EmptyDataError:
            return pd.DataFrame()

    def _load_hdf(self) -> pd.DataFrame:
        self._ensure_hdf_engine()
        with pd.HDFStore(self.path, mode="r") as store:
            for key in store.keys():
                obj = store.get(key)
                if isinstance(obj, pd.DataFrame):
                    return obj
        return pd.DataFrame()

    def _ensure_parquet_engine(self):
        try:
            import pyarrow  # noqa: F401

            return
        except ImportError:
            pass
        raise MissingEngine("Parquet support requires pyarrow. Install via: pip install pyarrow")

    def _ensure_excel_engine(self):
        try:
            import openpyxl  # noqa: F401

            return
        except ImportError:
            pass
        raise MissingEngine("XLSX support requires openpyxl. Install via: pip install openpyxl")

    def _ensure_hdf_engine(self):
        try:
            import tables  # type: ignore  # noqa: F401

            return
        except ImportError:
            pass
        raise MissingEngine("HDF5 support requires tables. Install via: pip install tables")
