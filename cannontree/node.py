import bisect
import functools
import weakref


@functools.total_ordering
class Entry(object):
    """
    Unit stores a pair of key-value, ordered by its key only so that a list of
    entries can be searched with a bare key.
    """
    __slots__ = ('key', 'value')

    def __init__(self, key, value=None):
        self.key = key
        self.value = value

    def __eq__(self, other):
        if isinstance(other, Entry):
            return self.key == other.key
        return self.key == other

    def __lt__(self, other):
        if isinstance(other, Entry):
            return self.key < other.key
        return self.key < other

    __hash__ = None

    def __str__(self):
        return '<{key}:{val}>'.format(key=self.key, val=self.value)

    __repr__ = __str__


class BNode(object):
    """
    A node of the in-memory B tree. Leaves have no children, branches hold one
    more child than entries. `parent` is a weak back-reference, the tree owns
    nodes only through `children`.
    """
    __slots__ = ('tree', 'contents', 'children', '_parent', '__weakref__')

    def __init__(self, tree, contents: list = None, children: list = None, parent=None):
        self.tree = tree
        self.contents = [] if contents is None else contents
        self.children = [] if children is None else children
        self._parent = None
        self.parent = parent
        if self.children:
            assert len(self.contents) + 1 == len(self.children), \
                'One more child than entries required'
            for child in self.children:
                child.parent = self

    def __repr__(self):
        name = 'Branch' if self.children else 'Leaf'
        return '<{name} [{pairs}]>'.format(
            name=name, pairs=', '.join([str(it) for it in self.contents]))

    __str__ = __repr__

    @property
    def parent(self):
        return self._parent() if self._parent is not None else None

    @parent.setter
    def parent(self, node):
        self._parent = weakref.ref(node) if node is not None else None

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def items(self) -> list:
        return [(it.key, it.value) for it in self.contents]

    def index_of(self, key) -> int:
        """
        Insertion index of key: the first entry whose key is not less than it,
        which is also the child to descend into when the key is not here.
        """
        return bisect.bisect_left(self.contents, key)

    def holds(self, index: int, key) -> bool:
        return index < len(self.contents) and self.contents[index].key == key

    def child_index(self, child) -> int:
        for index, node in enumerate(self.children):
            if node is child:
                return index
        raise ValueError('{child!r} is not a child of {self!r}'.format(child=child, self=self))

    def split_child(self, index: int):
        """
        Split the overflowing child at `index` into two nodes and pass its median
        up into this node.
        :return: the new right sibling.
        """
        child = self.children[index]
        mid = (len(child.contents) - 1) // 2
        mid_children = len(child.children) // 2
        sibling = type(child)(
            tree=self.tree,
            contents=child.contents[mid + 1:],
            children=child.children[mid_children:],
            parent=self)
        self.contents.insert(index, child.contents[mid])
        self.children.insert(index + 1, sibling)
        child.contents = child.contents[:mid]
        child.children = child.children[:mid_children]
        child.parent = self
        return sibling

    def lateral(self, parent, parent_index, target, target_index):
        """
        lend one entry to the sibling target[target_index], rotating it through
        the separator held by parent.
        """
        if parent_index > target_index:
            target.contents.append(parent.contents[target_index])
            parent.contents[target_index] = self.contents.pop(0)
            if self.children:
                child = self.children.pop(0)
                target.children.append(child)
                child.parent = target
        else:
            target.contents.insert(0, parent.contents[parent_index])
            parent.contents[parent_index] = self.contents.pop()
            if self.children:
                child = self.children.pop()
                target.children.insert(0, child)
                child.parent = target

    def consolidate(self, index: int):
        """
        Merge children[index + 1] and the separator between them into children[index].
        :return: the merged node.
        """
        left, right = self.children[index], self.children[index + 1]
        left.contents.append(self.contents.pop(index))
        left.contents.extend(right.contents)
        for child in right.children:
            child.parent = left
        left.children.extend(right.children)
        self.children.pop(index + 1)
        right.parent = None
        return left

    def grow(self):
        """
        grow from current node up to the root until the tree is balanced,
        by borrowing entries from siblings or consolidating with one of them.
        """
        parent = self.parent
        if parent is None:
            # the root is exempt from the minimum, it only goes away once empty
            if not self.contents:
                self.tree._replace_root(self.children[0] if self.children else None)
            return

        minimum = self.tree.min_elements
        if len(self.contents) >= minimum:
            return

        index = parent.child_index(self)
        # try to borrow from the left sibling
        if index:
            left_sib = parent.children[index - 1]
            if len(left_sib.contents) > minimum:
                left_sib.lateral(parent, index - 1, self, index)
                return

        # try to borrow from the right sibling
        if index + 1 < len(parent.children):
            right_sib = parent.children[index + 1]
            if len(right_sib.contents) > minimum:
                right_sib.lateral(parent, index + 1, self, index)
                return

        # consolidate with a sibling - try left first
        parent.consolidate(index - 1 if index else index)
        parent.grow()

    def remove(self, index: int):
        """
        Remove contents[index]. A branch entry is replaced by its predecessor when
        the predecessor's leaf can spare one, otherwise by its successor.
        """
        if self.children:
            descendant = self.children[index]
            while descendant.children:
                descendant = descendant.children[-1]
            if len(descendant.contents) > self.tree.min_elements:
                self.contents[index] = descendant.contents.pop()
                return

            descendant = self.children[index + 1]
            while descendant.children:
                descendant = descendant.children[0]
            self.contents[index] = descendant.contents[0]
            descendant.remove(0)
        else:
            self.contents.pop(index)
            self.grow()
