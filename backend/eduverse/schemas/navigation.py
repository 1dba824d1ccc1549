from typing import List
from pydantic import BaseModel

from eduverse.navigation import NavLink, View


class NavigationState(BaseModel):
    current: View
    links: List[NavLink]


class NavigationRequest(BaseModel):
    view: View
