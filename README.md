# structassert

Structural assertions for tests. Instead of checking a nested object one
attribute at a time, describe what it should look like and let
`assert_struct` walk the value and the pattern together. Only the parts you
name are checked, and a failure tells you which part did not match.

The package has no runtime dependencies.

## Modules

- `structassert.matching`: `assert_struct(value, pattern)` and the
  `StructMismatch` exception.
- `structassert.patterns`: the pattern types, the matcher helpers and
  `to_pattern`.
- `structassert.like`: the `Like` base class and the `like(value, pattern)`
  function.

## Usage

`assert_struct(value, pattern)` checks `value` and returns it unchanged.
Plain values in a pattern are compared for equality; the helpers express
everything else.

```python
from structassert.matching import assert_struct
from structassert.patterns import eq, ge, gt, lt, matches, ne, some

assert_struct(25, gt(20))
assert_struct(25, eq(25))
assert_struct("alice", ne("bob"))
assert_struct("user-12345", matches(r"^user-\d+$"))
assert_struct(42, some(gt(40)))
assert_struct(None, None)
```

### Matcher helpers

| Helper       | Passes when                                                        |
|--------------|--------------------------------------------------------------------|
| `lt(x)`      | value `< x`                                                        |
| `le(x)`      | value `<= x`                                                       |
| `gt(x)`      | value `> x`                                                        |
| `ge(x)`      | value `>= x`                                                       |
| `eq(x)`      | value `== x`                                                       |
| `ne(x)`      | value `!= x`                                                       |
| `matches(p)` | a regex string `p` (made a `Regex`), or a compiled regex or `Like` object (made a `LikePattern`) matches the value |
| `some(p)`    | value is not `None` and matches `p`                                |

The comparison helpers need a complete value: passing a pattern or `...`
raises `TypeError`.

### Plain values

`to_pattern(value)` turns an ordinary value into the pattern it stands for,
and is applied to every value inside a pattern:

- a `Pattern` passes through unchanged;
- `...` is a rest marker (`Rest`);
- a `list` becomes a `Slice`, a `tuple` becomes a `Tuple`;
- a `range` with step 1 becomes a half-open `Range`;
- a compiled regex or a `Like` object becomes a `LikePattern`;
- anything else must be equal (`Simple`).

```python
assert_struct([10, 20, 30, 40], [10, 20, ...])   # prefix
assert_struct([10, 20, 30, 40], [..., 40])       # suffix
assert_struct([5, 15, 25], [gt(0), lt(20), eq(25)])
assert_struct((15, 25), (gt(10), lt(30)))
assert_struct(15, range(10, 20))
```

A slice pattern matches any sequence except strings and byte strings, and
holds at most one `...`; a second one raises `ValueError`.

### Objects: `Struct`

`Struct(kind, *parts, **fields)` checks that the value is an instance of
`kind` and that its named fields match. Fields may be given as keyword
arguments or as mappings; `...` among the parts allows fields to be left
out. Without it, every field of the value must appear in the pattern. Fields
are read from dataclasses, named tuples, mappings and ordinary objects'
public attributes. A `kind` of `None` accepts a value of any type.

```python
from dataclasses import dataclass

from structassert.patterns import Struct


@dataclass
class Address:
    street: str
    city: str


@dataclass
class User:
    name: str
    age: int
    address: Address


user = User("Alice", 30, Address("123 Main St", "Springfield"))

assert_struct(user, Struct(User, name="Alice", age=ge(18),
                           address=Struct(Address, ..., city="Springfield")))
assert_struct({"status": "ok", "code": 200}, Struct(None, ..., code=200))
```

A field name that the value does not have, or a missing field in a pattern
without `...`, is a mismatch.

### Variants: `Variant`

`Variant(kind, *elements)` checks what kind of value is present:

- with a class as `kind`, the value must be an instance, and its positional
  members (from `__match_args__`, dataclass fields or tuple items) must match
  the elements one by one;
- with any other `kind`, such as an enum member, and no elements, the value
  must be that member or equal to it;
- with `None` as `kind` and one element, the value must not be `None` and
  must match the element; this is what `some(p)` builds.

```python
from enum import Enum

from structassert.patterns import Variant


class Status(Enum):
    ACTIVE = 1
    INACTIVE = 2


@dataclass
class Drag:
    x0: int
    y0: int
    x1: int
    y1: int


assert_struct(Status.ACTIVE, Variant(Status.ACTIVE))
assert_struct(Drag(10, 20, 110, 120), Variant(Drag, ge(0), ge(0), lt(200), lt(200)))
```

### Other pattern types

- `Comparison(op, expected)`, with `op` a `ComparisonOp`
  (`LESS`, `LESS_EQUAL`, `GREATER`, `GREATER_EQUAL`, `EQUAL`, `NOT_EQUAL`);
  `ComparisonOp.evaluate(left, right)` applies the operator.
- `Range(start=None, end=None, inclusive=False)`: a missing bound is
  unbounded; at least one bound is required, and an inclusive range needs an
  end. `Range.contains(value)` tests membership.
- `Regex(pattern)`: compiles the expression at once and raises `ValueError`
  if it is invalid. The expression matches anywhere in the string unless it
  is anchored.
- `LikePattern(pattern)`: matches through `like`.

### Custom matching with `Like`

`like(value, pattern)` accepts a `Like` object, a compiled regex or a regex
string. Regexes match strings only (another type raises `TypeError`), and a
regex string that does not compile matches nothing. Subclass `Like` and
implement `like(self, value)` for a custom rule:

```python
from structassert.like import Like, like


class Domain(Like):
    def __init__(self, domain):
        self.domain = domain

    def like(self, value):
        return value.endswith("@" + self.domain)


assert like("hello123", r"\w+\d+")
assert not like("test", r"[")
assert like("user@example.com", Domain("example.com"))
assert_struct("user@example.com", matches(Domain("example.com")))
```

### Failures

A mismatch raises `StructMismatch`, a subclass of `AssertionError`, at the
first part of the value that does not match. Its `path` attribute names that
part, such as `address.city` or `items[2]` (empty at the root), and `detail`
holds the description, for example `Failed comparison`, `Failed equality`,
`Failed inequality`, `Value not in range`, `Expected None, got Some`,
`Expected Some(...), got None`, `Pattern mismatch`,
`Value does not match regex pattern` or `assertion `left == right` failed`.

```python
import pytest

from structassert.matching import StructMismatch

with pytest.raises(StructMismatch) as info:
    assert_struct(user, Struct(User, ..., address=Struct(Address, ..., city="Boston")))
assert info.value.path == "address.city"
```

## Running the tests

```
pip install -e ".[test]"
pytest
```