from umbra.store.files import CatalogStore, ColorMapStore, JsonFileStore, StylesheetStore

__all__ = ["CatalogStore", "ColorMapStore", "JsonFileStore", "StylesheetStore"]
