from enum import Enum, auto

class DataType(Enum):
    # Scalars
    FLOAT = auto()
    INT = auto()
    BOOL = auto()

    # Vectors
    VEC2 = auto()
    VEC3 = auto()
    VEC4 = auto()

    @classmethod
    def parse(cls, name) -> 'DataType':
        """Accepts a DataType or its GLSL spelling ('float', 'vec3', ...)."""
        if isinstance(name, cls):
            return name
        try:
            return cls[str(name).upper()]
        except KeyError:
            raise ValueError(f"Unknown port type: {name!r}") from None

    def is_vector(self):
        return self in {DataType.VEC2, DataType.VEC3, DataType.VEC4}

    def is_color(self):
        """vec3/vec4 outputs are candidates for the final color."""
        return self in {DataType.VEC3, DataType.VEC4}

    def __str__(self):
        return self.name.lower()


class ParamType(Enum):
    """Storage type of a node parameter (distinct from port types)."""
    FLOAT = auto()
    INT = auto()
    STRING = auto()
    ARRAY = auto()
    VEC4 = auto()

    @classmethod
    def parse(cls, name) -> 'ParamType':
        if isinstance(name, cls):
            return name
        try:
            return cls[str(name).upper()]
        except KeyError:
            raise ValueError(f"Unknown parameter type: {name!r}") from None

    def __str__(self):
        return self.name.lower()


class InputMode(Enum):
    """How a wired value combines with a parameter's authored value."""
    OVERRIDE = 'override'
    ADD = 'add'
    SUBTRACT = 'subtract'
    MULTIPLY = 'multiply'

    @classmethod
    def parse(cls, value) -> 'InputMode':
        if isinstance(value, cls):
            return value
        return cls(str(value).lower())

    @property
    def operator(self) -> str:
        return {
            InputMode.ADD: '+',
            InputMode.SUBTRACT: '-',
            InputMode.MULTIPLY: '*',
        }.get(self, '')

    def __str__(self):
        return self.value
