SIZEOF_INT32 = 4


class Reference:
    """
    Represents a reference sequence (contig) that alignment records are positioned against.
    """
    __slots__ = 'name', 'length', 'index'

    def __init__(self, name: str, length: int, index: int = 0):
        """
        Constructor.
        :param name: Reference sequence name.
        :param length: Total length of the reference sequence.
        :param index: Index used to dereference record reference ids.
        """
        self.name = name
        self.length = length
        self.index = index

    def __repr__(self):
        return "@SQ SN:{} LN:{}".format(self.name, self.length)

    def __eq__(self, other):
        if not isinstance(other, Reference):
            return NotImplemented
        return (self.name, self.length, self.index) == (other.name, other.length, other.index)

    def __hash__(self):
        return hash((self.name, self.length, self.index))

    def pack(self):
        """
        Convert to BAM formatted bytes representation.
        :return: Bytes object instance containing data.
        """
        return ((len(self.name) + 1).to_bytes(SIZEOF_INT32, 'little', signed=True)
                + self.name.encode('ascii') + b'\x00'
                + self.length.to_bytes(SIZEOF_INT32, 'little', signed=True))
