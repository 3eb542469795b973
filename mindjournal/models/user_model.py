# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindJournal project.
# Licensed under the MIT License - see the LICENSE file for details.

from typing import Optional

from pydantic import BaseModel


class User(BaseModel):
    # Owned by Firebase Auth; never written by this service
    id: str
    name: str = ""
    email: Optional[str] = None
    avatar_url: Optional[str] = None

    @classmethod
    def from_token(cls, decoded: dict) -> "User":
        return cls(
            id=decoded["uid"],
            name=decoded.get("name") or "",
            email=decoded.get("email"),
            avatar_url=decoded.get("picture"),
        )

    def __repr__(self):
        return f"<User id={self.id}>"
