"""Column types shared by models and tracking dimensions."""

from __future__ import annotations

from sqlalchemy import Integer
from sqlalchemy.dialects import mysql

# INTEGER(11) UNSIGNED on MySQL, plain INTEGER elsewhere.
UnsignedInteger = Integer().with_variant(mysql.INTEGER(display_width=11, unsigned=True), "mysql", "mariadb")


__all__ = ["UnsignedInteger"]
