class ScratchBuffer:
    """
    Scratch storage owned by an engine instance across calls.

    The backing array is reallocated only when the requested length differs
    from the current one, so repeated calls with a stable shape reuse it.
    Contents are not preserved across a resize.
    """
    def __init__(self, name, context):
        """
        :param name: Label used in verbose output
        :param context: CPUContext that allocates the backing array
        """
        self.name = name
        self.context = context
        self.data = context.empty(0)
        self.allocations = 0

    @property
    def numel(self):
        return self.data.shape[0]

    def resize(self, n):
        """
        :param n: Required length
        :return: True if the backing array was reallocated
        """
        if self.numel == n:
            return False
        if self.context.verbose:
            print(f"Resizing {self.name} scratch: {self.numel} -> {n}")
        self.data = self.context.empty(n)
        self.allocations += 1
        return True

    def resize_ones(self, n):
        """
        Resize to n and fill with 1.0, only when the length changes.
        """
        if self.resize(n):
            self.context.set(n, 1.0, self.data)
        return self.data
