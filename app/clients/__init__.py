from .sheetdb import SheetDBClient

__all__ = ["SheetDBClient"]
