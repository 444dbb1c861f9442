"""Strongly typed identifiers for Chorus domain entities.

Identifiers are opaque strings handed to us by the record store, so we use
NewType over str rather than UUID. Ids generated locally are uuid4 strings.
"""

from typing import NewType

ReplyId = NewType("ReplyId", str)
UserId = NewType("UserId", str)
ScopeId = NewType("ScopeId", str)
