from typing import Any, Dict, List, Optional


class CharacterQueryBuilder:
    """
    Query builder for character search.

    Compiles free text into a multi-field match where the name field weighs
    far more than the description.
    """

    def __init__(self, query: str, name_boost: int = 10, fields: Optional[List[str]] = None):
        """
        Initialize query builder.

        Args:
            query: Search query text
            name_boost: Weight of the name field relative to description
            fields: Fields to search (with optional boosting)
        """
        self.query = query
        self.fields = fields or [f"name^{name_boost}", "description"]

    def build(self) -> Dict[str, Any]:
        """Build the complete query document."""
        return {"query": self._build_text_query()}

    def _build_text_query(self) -> Dict[str, Any]:
        return {
            "multi_match": {
                "query": self.query,
                "fields": list(self.fields),
            }
        }


def build_query(text: str, name_boost: int = 10) -> Dict[str, Any]:
    """Helper function to build a search query."""
    return CharacterQueryBuilder(query=text, name_boost=name_boost).build()
