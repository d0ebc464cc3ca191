"""
Pipeline nodes. Each node reads the MappingState and returns a partial update.
"""

from .categorization_node import categorization_node
from .classification_node import classification_node
from .field_mapping_node import field_mapping_node
from .suggestion_node import suggestion_node
from .relationship_node import relationship_node
from .assembly_node import assembly_node

__all__ = [
    "categorization_node",
    "classification_node",
    "field_mapping_node",
    "suggestion_node",
    "relationship_node",
    "assembly_node",
]
