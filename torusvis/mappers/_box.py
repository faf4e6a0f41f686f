from __future__ import annotations


def _as3(values, fill):
    values = [float(v) for v in values]
    return (values + [fill] * 3)[:3] if len(values) < 3 else values


class _BoxMixin:
    # Box geometry shared by the periodic mappers: center, dimensions, shifts.
    # Dimensions are stored as absolute values; center and dimensions are
    # padded to 3 components.

    def _init_box(self, center, dimensions):
        self.center = _as3(center, 0.0)
        self.dimensions = [abs(d) for d in _as3(dimensions, 0.0)]
        self.shifts = [self._coerce_shift(0) for _ in self.dimensions]

    @staticmethod
    def _coerce_shift(x):
        return float(x)

    def get_center(self):
        return list(self.center)

    def get_center_component(self, i):
        return self.center[i]

    def set_center(self, center):
        for i, x in enumerate(center):
            self.set_center_component(i, x)
        return self

    def set_center_component(self, i, x):
        self.center[i] = float(x)
        return self

    def get_dimensions(self):
        return list(self.dimensions)

    def get_dimension_component(self, i):
        return self.dimensions[i]

    def set_dimensions(self, dimensions):
        for i, x in enumerate(dimensions):
            self.set_dimension_component(i, x)
        return self

    def set_dimension_component(self, i, x):
        self.dimensions[i] = abs(float(x))
        return self

    def get_shifts(self):
        return list(self.shifts)

    def get_shift_component(self, i):
        return self.shifts[i]

    def set_shifts(self, shifts):
        for i, x in enumerate(shifts):
            self.set_shift_component(i, x)
        return self

    def set_shift_component(self, i, x):
        self.shifts[i] = self._coerce_shift(x)
        return self

    def _corner(self, i):
        # lower corner of the box along axis i
        return self.center[i] - 0.5 * self.dimensions[i]

    def __repr__(self):
        return (
            f"{type(self).__name__}(center={self.center}, "
            f"dimensions={self.dimensions}, shifts={self.shifts})"
        )
