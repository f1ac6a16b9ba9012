"""Tests for forager trail following, loop avoidance and food transport."""

from numpy.random import Generator

from antcolony.colony.ant import AntKind
from antcolony.colony.colony import Colony
from antcolony.colony.forager import Forager, VisitedGraph
from antcolony.colony.queen import Queen


def _hide_all_but(colony: Colony, *keep: tuple[int, int]) -> None:
    for cell in colony.grid:
        if cell.coords not in keep:
            cell.hide()


class TestVisitedGraph:
    """Tests for the per-excursion visited set."""

    def test_add_reports_new_nodes(self) -> None:
        graph = VisitedGraph()
        assert graph.add((1, 1))
        assert graph.add((2, 2), parent=(1, 1))
        assert not graph.add((1, 1), parent=(2, 2))
        assert (2, 2) in graph
        assert len(graph) == 2
        assert graph.edges == {(1, 1): {(2, 2)}}

    def test_clear(self) -> None:
        graph = VisitedGraph()
        graph.add((1, 1))
        graph.add((1, 2), parent=(1, 1))
        graph.clear()
        assert len(graph) == 0
        assert not graph.edges


class TestChooseDestination:
    """Tests for the pheromone-driven next-cell rule."""

    def test_follows_strongest_trail(self, colony: Colony, rng: Generator) -> None:
        forager = colony.spawn(AntKind.FORAGER, 4, 4)
        colony.grid.cell_at(5, 5).add_pheromone(20, cap=1000)
        colony.grid.cell_at(3, 3).add_pheromone(10, cap=1000)
        assert forager.choose_destination(rng) == (5, 5)

    def test_ties_broken_at_random(self, colony: Colony, rng: Generator) -> None:
        forager = colony.spawn(AntKind.FORAGER, 4, 4)
        colony.grid.cell_at(5, 5).add_pheromone(20, cap=1000)
        colony.grid.cell_at(3, 3).add_pheromone(20, cap=1000)
        colony.grid.cell_at(3, 4).add_pheromone(5, cap=1000)
        picks = {forager.choose_destination(rng) for _ in range(50)}
        assert picks == {(5, 5), (3, 3)}

    def test_skips_previous_cell(self, colony: Colony, rng: Generator) -> None:
        forager = colony.spawn(AntKind.FORAGER, 4, 4)
        forager.previous = (5, 5)
        colony.grid.cell_at(5, 5).add_pheromone(20, cap=1000)
        colony.grid.cell_at(3, 3).add_pheromone(10, cap=1000)
        assert forager.choose_destination(rng) == (3, 3)

    def test_ignores_hidden_cells(self, colony: Colony, rng: Generator) -> None:
        forager = colony.spawn(AntKind.FORAGER, 4, 4)
        colony.grid.cell_at(5, 5).add_pheromone(50, cap=1000)
        colony.grid.hide(5, 5)
        colony.grid.cell_at(3, 3).add_pheromone(10, cap=1000)
        assert forager.choose_destination(rng) == (3, 3)

    def test_wanders_without_signal(self, colony: Colony, rng: Generator) -> None:
        forager = colony.spawn(AntKind.FORAGER, 4, 4)
        forager.previous = (3, 3)
        for _ in range(30):
            target = forager.choose_destination(rng)
            assert target != (3, 3)
            assert colony.grid.cell_at(*target).revealed

    def test_backs_out_of_dead_end(self, colony: Colony, rng: Generator) -> None:
        _hide_all_but(colony, (4, 4), (5, 4))
        forager = colony.spawn(AntKind.FORAGER, 4, 4)
        forager.previous = (5, 4)
        assert forager.choose_destination(rng) == (5, 4)

    def test_nowhere_to_go(self, colony: Colony, rng: Generator) -> None:
        _hide_all_but(colony, (4, 4))
        forager = colony.spawn(AntKind.FORAGER, 4, 4)
        assert forager.choose_destination(rng) is None
        forager.take_action(rng)
        assert forager.coords == (4, 4)
        assert forager.path == []


class TestLoopHandling:
    """Tests for visited-graph redirection and stack trimming."""

    def test_unvisited_target_accepted(self, colony: Colony, rng: Generator) -> None:
        forager = colony.spawn(AntKind.FORAGER, 4, 4)
        assert forager.avoid_loop((5, 5), rng) == (5, 5)
        assert (5, 5) in forager.visited

    def test_visited_target_redirected(self, colony: Colony, rng: Generator) -> None:
        forager = colony.spawn(AntKind.FORAGER, 4, 4)
        forager.visited.add((5, 5))
        target = forager.avoid_loop((5, 5), rng)
        assert target != (5, 5)
        assert target in forager.visited
        assert colony.grid.cell_at(*target).revealed

    def test_falls_back_to_previous(self, colony: Colony, rng: Generator) -> None:
        forager = colony.spawn(AntKind.FORAGER, 4, 4)
        forager.previous = (3, 3)
        for x in range(3, 6):
            for y in range(3, 6):
                if (x, y) != (4, 4):
                    forager.visited.add((x, y))
        assert forager.avoid_loop((5, 5), rng) == (3, 3)

    def test_trim_loop_cuts_to_last_occurrence(self, colony: Colony) -> None:
        forager = colony.spawn(AntKind.FORAGER, 4, 4)
        forager.path = [(3, 3), (4, 4), (5, 5), (4, 4), (5, 4)]
        forager.trim_loop()
        assert forager.path == [(3, 3), (4, 4), (5, 5)]

    def test_trim_loop_without_cycle(self, colony: Colony) -> None:
        forager = colony.spawn(AntKind.FORAGER, 4, 4)
        forager.path = [(3, 3), (3, 4)]
        forager.trim_loop()
        assert forager.path == [(3, 3), (3, 4)]

    def test_never_steps_onto_seen_cell_except_previous(
        self,
        colony: Colony,
        rng: Generator,
    ) -> None:
        forager = colony.spawn(AntKind.FORAGER, 4, 4)
        for _ in range(40):
            previous = forager.previous
            seen = set(forager.visited.nodes)
            forager.take_action(rng)
            assert forager.coords == previous or forager.coords not in seen
            assert forager.cell.revealed
        assert len(forager.visited) <= 9


class TestFoodTransport:
    """Tests for picking up, carrying and delivering food."""

    def test_round_trip_delivers_food(self, colony: Colony, queen: Queen) -> None:
        _hide_all_but(colony, (4, 4), (5, 4))
        colony.grid.reveal(6, 4)
        colony.grid.cell_at(6, 4).add_food(5)
        forager = colony.spawn(AntKind.FORAGER, 4, 4)
        assert isinstance(forager, Forager)

        for _ in range(4):
            colony.process_turn()

        assert forager.coords == (4, 4)
        assert queen.cell.food == 997
        assert colony.grid.cell_at(6, 4).food == 4
        assert colony.grid.cell_at(6, 4).pheromone == 10
        assert colony.grid.cell_at(5, 4).pheromone == 10
        assert queen.cell.pheromone == 0
        assert forager.carrying == 0
        assert forager.path == []
        assert len(forager.visited) == 0
        assert forager.previous is None

    def test_picks_up_one_unit(self, colony: Colony) -> None:
        forager = colony.spawn(AntKind.FORAGER, 5, 5)
        colony.grid.cell_at(5, 5).add_food(3)
        assert forager.pick_up_food()
        assert forager.carrying == 1
        assert forager.cell.food == 2
        assert not forager.pick_up_food()

    def test_no_pickup_on_queen_cell(self, colony: Colony, queen: Queen) -> None:
        forager = colony.spawn(AntKind.FORAGER, 4, 4)
        assert not forager.pick_up_food()
        assert queen.cell.food == 1000

    def test_returning_deposits_up_to_cap(self, colony: Colony, queen: Queen) -> None:
        forager = colony.spawn(AntKind.FORAGER, 5, 4)
        forager.carrying = 1
        forager.path = [(4, 4)]
        colony.grid.cell_at(5, 4).add_pheromone(995, cap=1000)
        forager.take_action(colony.rng)
        assert colony.grid.cell_at(5, 4).pheromone == 1000
        assert forager.coords == (4, 4)
        assert forager.carrying == 0
        assert queen.cell.food == 1001

    def test_empty_stack_stays_put(self, colony: Colony, rng: Generator) -> None:
        forager = colony.spawn(AntKind.FORAGER, 5, 5)
        forager.carrying = 1
        forager.take_action(rng)
        assert forager.coords == (5, 5)
        assert forager.carrying == 1
        assert forager.cell.pheromone == 10

    def test_kill_drops_carried_food(self, colony: Colony) -> None:
        forager = colony.spawn(AntKind.FORAGER, 5, 5)
        forager.carrying = 1
        forager.path = [(4, 4)]
        forager.kill()
        assert forager.cell.food == 1
        assert forager.carrying == 0
        assert forager.path == []
        assert forager in colony.pending_dead
