from typing import Any, Dict, List, Optional

from config import MINTS_QUEUE_NAME


class Job:
    def __init__(self, name, data: Optional[Dict[str, Any]] = None,
                 queue_name: str = MINTS_QUEUE_NAME, children: Optional[List["Job"]] = None):
        self.name = name
        self.data = data or {}
        self.queue_name = queue_name
        self.children = children or []

    def as_dict(self):
        name = getattr(self.name, "value", self.name)
        return {
            "name": name,
            "queue_name": self.queue_name,
            "data": self.data,
            "children": [child.as_dict() for child in self.children],
        }

    def __repr__(self):
        name = getattr(self.name, "value", self.name)
        return f"Job(name={name!r}, data={self.data!r}, children={len(self.children)})"
