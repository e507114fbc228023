import random

from zipper.board import Board, BoardConfig, WallSegment, check_solution, generate_board, place_checkpoints
from tests.board_test_utils import route_positions, snake_route


def snake_board(size=5, nodes=1, walls=()):
    grid, route = snake_route(size)
    place_checkpoints(route, nodes, random.Random(0))
    config = BoardConfig(size=size, checkpoint_count=nodes, wall_count=len(walls))
    return Board(config=config, grid=grid, route=route, walls=list(walls))


def test_route_is_a_solution():
    board = generate_board(BoardConfig(7, 3, 6, seed=31))
    result = check_solution(board, route_positions(board.route))
    assert result.valid
    assert result.next_expected == 5
    assert result.reason is None


def test_snake_route_solves_snake_board():
    board = snake_board(6, 4)
    assert check_solution(board, route_positions(board.route)).valid


def test_empty_path_rejected():
    result = check_solution(snake_board(), [])
    assert not result.valid
    assert result.next_expected == 1


def test_must_start_on_first_checkpoint():
    board = snake_board()
    moves = route_positions(board.route)[1:]
    result = check_solution(board, moves)
    assert not result.valid
    assert "start" in result.reason


def test_reversed_route_hits_last_checkpoint_first():
    board = snake_board(5, 2)
    result = check_solution(board, route_positions(board.route)[::-1])
    assert not result.valid
    assert result.reason == "checkpoint 3 reached before 1"


def test_truncated_path_not_filled():
    board = snake_board()
    result = check_solution(board, route_positions(board.route)[:-1])
    assert not result.valid
    assert result.reason == "not every cell is filled"
    assert result.next_expected == 2


def test_non_adjacent_step_rejected():
    board = snake_board()
    moves = route_positions(board.route)
    moves = moves[:3] + moves[4:]
    result = check_solution(board, moves)
    assert not result.valid
    assert "not adjacent" in result.reason


def test_revisit_rejected():
    board = snake_board()
    moves = route_positions(board.route)[:3] + [(1, 0)]
    result = check_solution(board, moves)
    assert not result.valid
    assert "revisits" in result.reason


def test_out_of_bounds_rejected():
    board = snake_board()
    result = check_solution(board, [(0, 0), (-1, 0)])
    assert not result.valid
    assert "out of bounds" in result.reason


def test_wall_crossing_rejected():
    board = snake_board(walls=[WallSegment(0, 0, 0, 0, False)])
    result = check_solution(board, route_positions(board.route))
    assert not result.valid
    assert result.reason == "step 1 crosses a wall"


def test_wall_elsewhere_does_not_interfere():
    board = snake_board(walls=[WallSegment(0, 0, 3, 0, True)])
    assert check_solution(board, route_positions(board.route)).valid


def test_result_to_dict():
    result = check_solution(snake_board(), [])
    assert result.to_dict() == {"valid": False, "nextExpected": 1, "reason": "empty path"}
