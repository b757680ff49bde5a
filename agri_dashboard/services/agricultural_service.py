from typing import Any, Dict, Optional
from ..data.agricultural import AGRICULTURAL_DATA

# URL category -> top-level key
CATEGORIES = {
    "land-information": "landInformation",
    "crop-distribution": "cropDistribution",
    "livestock-information": "livestockInformation",
    "infrastructure": "infrastructure",
}

class UnknownCategoryError(LookupError):
    pass

def get_agricultural_data(category: str = "all", subcategory: Optional[str] = None) -> Dict[str, Any]:
    """
    Returns the catalog, one category of it, or one subcategory of a
    nested category (land information and crop distribution only).
    """
    if category == "all":
        return AGRICULTURAL_DATA

    key = CATEGORIES.get(category)
    if key is None:
        raise UnknownCategoryError(f"Unknown category: {category}")

    section = AGRICULTURAL_DATA[key]
    if subcategory and isinstance(section, dict):
        if subcategory not in section:
            raise UnknownCategoryError(f"Unknown subcategory: {subcategory}")
        return {key: {subcategory: section[subcategory]}}

    return {key: section}
