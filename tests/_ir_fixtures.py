from __future__ import annotations

from cloneprune.ir_model import Assign, Call

S1 = Assign(target="a", value="x + 1")
S2 = Call(target=None, callee="print", args=("a",))
S3 = Call(target=None, callee="print", args=("x",))
