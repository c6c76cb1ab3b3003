"""
Backend resources fronted by the gateway.
"""

from . import courses, students
from .base import ResourceDescriptor, ResourceResolverSet, field_names, unwrap

# Resource name -> descriptor factory, in schema order
RESOURCES = {
    "courses": courses.build_descriptor,
    "students": students.build_descriptor,
}

__all__ = [
    "RESOURCES",
    "ResourceDescriptor",
    "ResourceResolverSet",
    "field_names",
    "unwrap",
]
