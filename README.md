# capicore

Building blocks for service interfaces that talk across process boundaries:
typed values, abstract serialization streams, stub bookkeeping, configuration
reading and a runtime that hands proxy creation and stub registration to
pluggable factories.

## Installation

```
pip install capicore
```

To run the test suite from a checkout:

```
pip install ".[test]"
pytest
```

## Modules

- `capicore.utils`: `split(s, delim)` splits on a single-character delimiter,
  keeping empty fields except a trailing one; `trim(s)` strips surrounding
  whitespace.
- `capicore.types`: the `CallStatus` and `AvailabilityStatus` enumerations,
  `CallInfo` (call timeout in milliseconds, default
  `DEFAULT_SEND_TIMEOUT_MS` = 5000, and a sender id), the abstract `ClientId`
  (equality, `hash_code()`, `uid`, `gid`; usable in sets), `ByteBuffer` and
  `enum_hash(value)`.
- `capicore.ranged`: `RangedInteger`. Declare a range with
  `class Percent(RangedInteger, minimum=0, maximum=100)`. Values outside the
  range are accepted; `validate()` reports whether the value is in range.
  Instances compare with each other and with plain integers.
- `capicore.enumeration`: `Enumeration`, an abstract base for enumerations
  that compare and hash by their underlying value; subclasses implement
  `validate()`.
- `capicore.deployable`: `Deployable`, a dataclass pairing a `value` with an
  optional deployment `depl`.
- `capicore.attribute_extension`: `AttributeExtension` and
  `AttributeCacheExtension`. The cache subscribes to the attribute's
  `changed_event` and keeps the last value it reports;
  `get_cached_value(default)` returns it, or `default` until one has arrived.
  `value_retrieved(status, value)` stores a value only when `status` is
  `CallStatus.SUCCESS`. For attributes without a `changed_event`, reading
  the cache raises `TypeError`.
- `capicore.streams`: the abstract `OutputStream` and `InputStream` that a
  wire format implements (`write_value` / `read_value` and `has_error`).
  `write(value)` and `read(value_type)` unwrap a `Deployable` and use its
  deployment; `stream << value` writes.
- `capicore.serialization`: `Struct` (ordered `values`, optional declared
  `field_types`), the abstract `PolymorphicStruct` with `get_serial()`,
  `write_struct`, `read_struct`, `serialize_arguments` (returns `False` at the
  first failed write) and `deserialize_arguments` (returns the values read,
  raises `ValueError` at the first failed read).
- `capicore.inifile`: `IniFileReader` and `Section`. `load(path)` returns
  `False` if the file cannot be read; `get_section(name)` returns `None` for
  a missing section; `Section.get_value(key)` returns `""` for a missing key.
- `capicore.stub`: `StubAdapter` (holds an `address`), the abstract
  `StubBase` and `Stub` (which keeps only a weak reference to its adapter;
  `get_stub_adapter()` returns `None` once it is gone) and
  `SelectiveBroadcastSubscriptionEvent`.
- `capicore.runtime`: the abstract `Factory`, `Runtime`, `ProxyManager`,
  `get_runtime()`, `get_property` / `set_property` and
  `normalize_library_name`.

## Example

```python
from capicore.runtime import Factory, get_runtime


class LocalFactory(Factory):
    def init(self):
        pass

    def create_proxy(self, domain, interface, instance, connection):
        return (domain, interface, instance)

    def register_stub(self, domain, interface, instance, stub, connection):
        return True

    def unregister_stub(self, domain, interface, instance):
        return True


runtime = get_runtime()
runtime.register_factory("local", LocalFactory())
proxy = runtime.create_proxy("local", "com.example.Echo", "main", "client")
```

The factory registered under the default binding (`dbus` unless configured
otherwise) replaces any earlier one and is asked last; every other binding
can be registered once, and those factories are asked in order of binding
name.

## Libraries

When no factory produces a proxy or accepts a stub, the runtime works out a
library name for the address with `get_library`: a name mapped in the
configuration, else `lib<LibraryBase>-<binding>` if the `LibraryBase`
property is set, else `lib<domain>__<interface>__<instance>` with dots turned
into underscores. `load_library` then looks for a loader registered with
`Runtime.register_library(library, loader)`; the loader is called once with
the runtime, typically to register factories, and may return `False` to
report failure. Names are given a `.so` suffix by `normalize_library_name`
before lookup.

## Configuration

`get_runtime()` reads `commonapi.ini` from the current directory, or else the
file named by the `COMMONAPI_CONFIG` environment variable (default
`/etc/commonapi.ini`). The `[default]` section may set `binding`, `folder`
and `callTimeout`; the `[proxy]` and `[stub]` sections map
`domain:interface:instance` addresses to library names; the `[logging]`
section's `console`, `file`, `dlt` and `level` are kept in
`Runtime.logging_settings`. The environment variables
`COMMONAPI_DEFAULT_BINDING` and `COMMONAPI_DEFAULT_FOLDER` override the
binding and folder.

## What this package does not do

- It has no transport of its own: proxies and stubs exist only through
  factories that you supply.
- It does not load shared libraries from disk; "loading a library" means
  calling a loader registered with `register_library`.
- It does not configure Python logging from the `[logging]` section; the
  settings are only recorded.
- It has no tagged-union value type.