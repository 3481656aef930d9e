"""Tests for the Snake module."""

import pytest

from classic_snake.grid import Coordinate
from classic_snake.snake import Direction, Snake


class TestDirection:
    @pytest.mark.parametrize(
        ("direction", "opposite"),
        [
            (Direction.UP, Direction.DOWN),
            (Direction.DOWN, Direction.UP),
            (Direction.LEFT, Direction.RIGHT),
            (Direction.RIGHT, Direction.LEFT),
        ],
    )
    def test_opposite(self, direction, opposite):
        assert direction.opposite is opposite

    def test_parse_names(self):
        assert Direction.parse("up") is Direction.UP
        assert Direction.parse(" Left ") is Direction.LEFT
        assert Direction.parse(Direction.DOWN) is Direction.DOWN

    def test_parse_unknown(self):
        assert Direction.parse("sideways") is None
        assert Direction.parse(3) is None


class TestSnakeInit:
    def test_single_segment(self):
        snake = Snake((10, 10))
        assert snake.head == (10, 10)
        assert len(snake) == 1
        assert isinstance(snake.head, Coordinate)

    def test_reset(self):
        snake = Snake((10, 10))
        snake.advance(Direction.RIGHT)
        snake.reset((3, 4))
        assert snake.segments() == ((3, 4),)


class TestSnakeMovement:
    @pytest.mark.parametrize(
        ("direction", "expected"),
        [
            (Direction.UP, (5, 4)),
            (Direction.DOWN, (5, 6)),
            (Direction.LEFT, (4, 5)),
            (Direction.RIGHT, (6, 5)),
        ],
    )
    def test_advance_offsets(self, direction, expected):
        snake = Snake((5, 5))
        assert snake.advance(direction) == expected
        assert snake.head == expected

    def test_advance_keeps_tail(self):
        snake = Snake((5, 5))
        snake.advance(Direction.RIGHT)
        assert snake.segments() == ((6, 5), (5, 5))

    def test_shrink_drops_tail(self):
        snake = Snake((5, 5))
        snake.advance(Direction.RIGHT)
        vacated = snake.shrink()
        assert vacated == (5, 5)
        assert snake.segments() == ((6, 5),)

    def test_shrink_below_one_rejected(self):
        snake = Snake((5, 5))
        with pytest.raises(ValueError, match="below one segment"):
            snake.shrink()

    def test_grow_is_noop(self):
        snake = Snake((5, 5))
        snake.advance(Direction.RIGHT)
        snake.grow()
        assert len(snake) == 2


class TestSnakeOccupancy:
    def test_occupies_excluding_head(self):
        snake = Snake((5, 5))
        snake.advance(Direction.RIGHT)
        snake.advance(Direction.RIGHT)
        assert snake.occupies_excluding_head() == {(6, 5), (5, 5)}
        assert snake.occupied() == {(7, 5), (6, 5), (5, 5)}

    def test_self_collision(self):
        snake = Snake((5, 5))
        assert not snake.self_collision()
        # Manually create a self-collision scenario.
        snake.body.appendleft(Coordinate(5, 5))
        assert snake.self_collision()

