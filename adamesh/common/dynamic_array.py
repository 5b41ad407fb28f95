import numpy as np


class DynamicArray:
    """
    Row storage backed by a numpy buffer that doubles its capacity when full.

    Only the first `size` rows are visible; indexing, `len` and `array()`
    all work on that view. Rows are never removed.
    """
    def __init__(self, shape, dtype=np.float64, capacity=64):
        if isinstance(shape, int):
            shape = (shape, )
        self.dtype = np.dtype(dtype)
        self.size = shape[0]
        self.capacity = max(self.size, capacity, 1)
        self.trailing = tuple(shape[1:])
        self.data = np.zeros((self.capacity,) + self.trailing, dtype=self.dtype)

    def _grow(self, capacity):
        data = np.zeros((capacity,) + self.trailing, dtype=self.dtype)
        data[:self.size] = self.data[:self.size]
        self.data = data
        self.capacity = capacity

    def append(self, value) -> int:
        """
        Append one row and return its index.
        The row's shape has to match the array's trailing dimensions.
        """
        value = np.asarray(value, dtype=self.dtype)
        if value.shape != self.trailing:
            raise ValueError('Input shape {} incompatible with '
                             'array shape {}'.format(value.shape, self.trailing))
        if self.size == self.capacity:
            self._grow(2*self.capacity)
        self.data[self.size] = value
        self.size += 1
        return self.size - 1

    def extend(self, values):
        values = np.asarray(values, dtype=self.dtype)
        required = self.size + values.shape[0]
        if required > self.capacity:
            self._grow(max(2*self.capacity, required))
        self.data[self.size:required] = values
        self.size = required

    def array(self):
        return self.data[:self.size]

    def copy(self):
        a = DynamicArray((self.size,) + self.trailing, dtype=self.dtype,
                         capacity=self.capacity)
        a.data[:self.size] = self.data[:self.size]
        return a

    def __getitem__(self, idx):
        return self.data[:self.size][idx]

    def __len__(self):
        return self.size

    def __repr__(self):
        return 'DynamicArray(size={}, capacity={})'.format(self.size, self.capacity)
