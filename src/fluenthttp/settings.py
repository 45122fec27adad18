"""
Settings for fluenthttp.

The SETTINGS dict follows the structure of fluenthttp submodules, so the
client defaults live under ``SETTINGS.http.client``:

```python
from fluenthttp.settings import CLIENT_SETTINGS

CLIENT_SETTINGS.timeout   # 30
```

The client defaults are read once, when
``fluenthttp.http.client.request`` is imported, into ``DEFAULT_TIMEOUT``
and ``DEFAULT_CONTENT_TYPE``. Every request configuration copies those
constants. Changing SETTINGS after import has no effect on clients or
on the CLI.
"""

SETTINGS = {
    'http': {
        'client': {
            'timeout': 30,  # seconds
            'content_type': "application/json",
        },
    },
}


class AttrDict(dict):
    """
    A dictionary subclass that allows dot-notation access while
    recursively converting nested dictionaries.
    """
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.__dict__ = self
        for key, value in self.items():
            self[key] = self._convert(value)

    @classmethod
    def _convert(cls, value):
        """Recursively converts dicts to AttrDicts, leaving other types alone."""
        if isinstance(value, dict):
            return cls(value)
        elif isinstance(value, list):
            return [cls._convert(item) for item in value]
        return value

    def __setitem__(self, key, value):
        super().__setitem__(key, self._convert(value))

    def __getattr__(self, key):
        try:
            return self[key]
        except KeyError as exc:
            raise AttributeError(f"AttrDict object has no attribute '{key}'") from exc


SETTINGS = AttrDict(SETTINGS)
CLIENT_SETTINGS = SETTINGS.http.client
