from bootwire.construction import Constructor
from bootwire.instance_cache import InstanceCache


class Point:
    def __init__(self, x, y, *, label=""):
        self.x = x
        self.y = y
        self.label = label


def test_construct_calls_class_with_arguments():
    point = Constructor().construct(Point, [1, 2], {"label": "origin"})

    assert (point.x, point.y, point.label) == (1, 2, "origin")


def test_registered_factory_takes_over():
    constructor = Constructor()
    constructor.register(Point, lambda x, y: Point(x * 10, y * 10))

    point = constructor.construct(Point, [1, 2])

    assert constructor.has_factory(Point)
    assert (point.x, point.y) == (10, 20)


def test_cache_stores_under_alias():
    class Shape:
        pass

    cache = InstanceCache()
    point = Point(0, 0)

    assert cache.store(Point, point, alias=Shape) is point
    assert cache[Shape] is cache[Point] is point
    assert set(cache) == {Point, Shape}
    assert len(cache) == 2


def test_cache_without_alias():
    cache = InstanceCache()
    cache.store(Point, Point(0, 0))

    assert Point in cache
    assert len(cache) == 1
