import re
from functools import lru_cache
from typing import Tuple, Union

from typing import TYPE_CHECKING

from varquantity.core.quantity import DynQuantity
from varquantity.core.unit import Unit

if TYPE_CHECKING:
    from varquantity.units.registry import UnitsRegistry

# --- Plan node types ------------------------------------------------
# ("num", <float>, None)
# ("name", <str>, None)
# ("neg", <plan>, None)
# ("pow", <plan>, <int>)
# ("mul", <plan>, <plan>)
# ("div", <plan>, <plan>)
Plan = Tuple[str, Union[str, float, "Plan"], Union[int, "Plan", None]]

_NUMBER_RE = re.compile(r"(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
# non-finite magnitudes as written by repr(): inf, nan
_NONFINITE_RE = re.compile(r"(?:inf(?:inity)?|nan)(?![A-Za-z0-9_])", re.IGNORECASE)

# ---------------- Parser that builds a PLAN (no registry lookups!) ----------------
class _QuantityExprParser:
    """
    Grammar (juxtaposition of two terms means multiplication, so
    "2 ohm*m" == "2 * ohm * m"):
      expr   := term (('*' | '·' | '/' | <implicit>) term)*
      term   := ['+'|'-'] factor [('**' | '^') signed_int]?
      factor := NUMBER | NAME | '(' expr ')'
      NAME   := letter (letter | digit | '_')*
      signed_int := ['+'|'-']? [0-9]+
    """
    def __init__(self, text: str):
        self.s = text
        self.n = len(text)
        self.i = 0

    def parse(self) -> Plan:
        self._skip_ws()
        if self.i == self.n:
            raise ValueError("Empty quantity expression")
        plan = self._parse_expr()
        self._skip_ws()
        if self.i != self.n:
            raise ValueError(f"Unexpected trailing input at {self.i}: {self.s[self.i:self.i+10]!r}")
        return plan

    # expr := term (('*' | '/' | implicit) term)*
    def _parse_expr(self) -> Plan:
        left = self._parse_term()
        while True:
            self._skip_ws()
            if (self._peek('*') and not self._peek('**')) or self._peek('·'):
                self.i += 1
                right = self._parse_term()
                left = ("mul", left, right)
            elif self._peek('/'):
                self._eat('/')
                right = self._parse_term()
                left = ("div", left, right)
            elif self._starts_factor():
                right = self._parse_term()
                left = ("mul", left, right)
            else:
                break
        return left

    # term := ['+'|'-'] factor [('**' | '^') signed_int]?
    def _parse_term(self) -> Plan:
        self._skip_ws()
        negate = False
        if self._peek('-') or self._peek('+'):
            negate = self.s[self.i] == '-'
            self.i += 1
        base = self._parse_factor()
        self._skip_ws()
        if self._peek('**') or self._peek('^'):
            self.i += 2 if self._peek('**') else 1
            exp = self._parse_signed_int()
            base = ("pow", base, exp)
        return ("neg", base, None) if negate else base

    # factor := NUMBER | NAME | '(' expr ')'
    def _parse_factor(self) -> Plan:
        self._skip_ws()
        if self._peek('('):
            self._eat('(')
            val = self._parse_expr()
            self._skip_ws()
            self._eat(')')
            return val
        m = _NUMBER_RE.match(self.s, self.i)
        if m:
            self.i = m.end()
            return ("num", float(m.group()), None)
        m = _NONFINITE_RE.match(self.s, self.i)
        if m:
            self.i = m.end()
            return ("num", float(m.group()), None)
        name = self._parse_name()
        if not name:
            ch = self.s[self.i:self.i+1]
            raise ValueError(f"Expected number, unit name or '(' at {self.i}, got {ch!r}")
        return ("name", name, None)

    # ---- token helpers ----
    def _starts_factor(self) -> bool:
        if self.i >= self.n:
            return False
        ch = self.s[self.i]
        return ch == '(' or ch == '.' or ch.isdigit() or ch.isalpha() or ch == '_'

    def _parse_name(self):
        self._skip_ws()
        i0 = self.i
        if i0 < self.n and (self.s[i0].isalpha() or self.s[i0] == '_'):
            self.i += 1
            while self.i < self.n and (self.s[self.i].isalnum() or self.s[self.i] == '_'):
                self.i += 1
            return self.s[i0:self.i]
        return None

    def _parse_signed_int(self) -> int:
        self._skip_ws()
        i0 = self.i
        if self.i < self.n and self.s[self.i] in '+-':
            self.i += 1
        i1 = self.i
        while self.i < self.n and self.s[self.i].isdigit():
            self.i += 1
        if i1 == self.i:
            raise ValueError(f"Expected integer exponent at {self.i}")
        return int(self.s[i0:self.i])

    def _skip_ws(self):
        s, n, i = self.s, self.n, self.i
        while i < n and s[i].isspace():
            i += 1
        self.i = i

    def _peek(self, tok: str) -> bool:
        self._skip_ws()
        return self.s.startswith(tok, self.i)

    def _eat(self, tok: str):
        if not self._peek(tok):
            got = self.s[self.i:self.i+len(tok)]
            raise ValueError(f"Expected {tok!r} at {self.i}, got {got!r}")
        self.i += len(tok)

# ---------------- Evaluation of a plan against a given registry ----------------
def _eval_plan(plan: Plan, reg: "UnitsRegistry") -> DynQuantity:
    kind = plan[0]
    if kind == "num":
        return DynQuantity(plan[1])
    elif kind == "name":
        name = plan[1]
        try:
            return reg.get(name).to_quantity()  # late binding to the provided registry
        except ValueError as e:
            raise ValueError(f"Unknown unit '{name}': {e}") from None
    elif kind == "neg":
        return -_eval_plan(plan[1], reg)
    elif kind == "pow":
        return _eval_plan(plan[1], reg) ** plan[2]
    elif kind == "mul":
        return _eval_plan(plan[1], reg) * _eval_plan(plan[2], reg)
    elif kind == "div":
        left = _eval_plan(plan[1], reg)
        right = _eval_plan(plan[2], reg)
        if right.value == 0.0:
            raise ValueError("Division by zero in quantity expression")
        return left / right
    else:
        raise RuntimeError(f"Invalid plan node: {plan!r}")

# ---------------- Public API with caching-safe compilation ----------------
# Cache the *compiled plan* only. Safe across registries because there's no bound objects inside.
@lru_cache(maxsize=4096)
def _compile_quantity_expr(expr: str) -> Plan:
    # cheap prefilter to reject disallowed characters early.
    disallowed = set('~!@#$%&|=,:;?<>\'\"`\\[]{}')
    if any(c in disallowed for c in expr):
        raise ValueError("Only numbers, unit names, *, /, ** or ^, parentheses and signs are allowed.")
    return _QuantityExprParser(expr).parse()

def parse_quantity(expr: str, reg: "UnitsRegistry") -> DynQuantity:
    """
    Parse a quantity expression like '2 ohm*m', '0.5 / K' or '1/(2.0e6) Ohm*m'
    into a DynQuantity holding the SI magnitude.

    Caching-safety:
      * We cache a compiled syntax plan keyed by `expr` only (no registry state).
      * Evaluation binds names to units from the *provided* `reg` at call time.

    Raises ValueError on malformed syntax or unknown unit names.
    """
    plan = _compile_quantity_expr(expr)
    return _eval_plan(plan, reg)

def extract_unit_expr(expr: str, reg: "UnitsRegistry") -> Unit:
    """
    Resolve a unit expression like 'mT', 'W/m^2' or 'kg*m/s**2' to a Unit
    named after the expression.
    """
    q = parse_quantity(expr, reg)
    if not q.value > 0:
        raise ValueError(f"Unit expression must have a positive scale, got {expr!r}")
    return Unit(expr.strip(), q.value, q.dim)
