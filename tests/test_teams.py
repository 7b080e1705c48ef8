"""Tests for Team and Teams."""
import pytest

from roster_balancer.errors import InvariantViolation
from roster_balancer.models.roles import RoleKind
from roster_balancer.models.team import Team, Teams

SLOTS = {RoleKind.TANK: 2, RoleKind.DPS: 2, RoleKind.SUPPORT: 2}


@pytest.fixture
def team(make_candidate):
    team = Team(name="Alpha", slots=dict(SLOTS))
    team.add_primary_player(make_candidate("t", tank=(1600, 1)))
    team.add_primary_player(make_candidate("d", dps=(1400, 1)))
    return team


class TestTeam:
    def test_counts(self, team):
        assert team.size == 6
        assert team.count() == 2
        assert not team.is_full()
        assert team.open_slots(RoleKind.TANK) == 1
        assert team.open_slots(RoleKind.SUPPORT) == 2
        assert team.kinds() == {RoleKind.TANK, RoleKind.DPS}

    def test_ranks(self, team):
        assert team.total_rank() == 3000
        assert team.average_rank() == 1500

    def test_empty_team_average(self):
        assert Team(name="Empty", slots=dict(SLOTS)).average_rank() == 0

    def test_range_targets_global_average(self, team):
        # 1500 * 3 - 3000 = 1500
        assert team.get_range(100, 1500) == (1400, 1600)
        # a weaker team asks for a stronger next member
        assert team.get_range(50, 1600) == (1750, 1850)

    def test_range_without_member(self, team):
        # without the tank: 1500 * 2 - 1400 = 1600
        assert team.get_range_without(0, 100, 1500) == (1500, 1700)

    def test_add_player_on_secondary_role(self, team, make_candidate):
        flex = make_candidate("flex", dps=(1500, 5), support=(1450, 1))
        member = team.add_player(flex, flex.roles.find(RoleKind.SUPPORT))
        assert member.rank == 1450
        assert team.open_slots(RoleKind.SUPPORT) == 1

    def test_duplicate_member(self, team, make_candidate):
        with pytest.raises(InvariantViolation):
            team.add_primary_player(make_candidate("t", tank=(1000, 1)))

    def test_full_slot(self, make_candidate):
        team = Team(name="Solo", slots={RoleKind.TANK: 1})
        team.add_primary_player(make_candidate("a", tank=(1000, 1)))
        with pytest.raises(ValueError):
            team.add_primary_player(make_candidate("b", tank=(1000, 1)))

    def test_replace_member(self, team, make_candidate):
        new = make_candidate("n", tank=(1700, 1))
        displaced = team.replace_member(0, new, new.get_primary_role())
        assert displaced.candidate.uuid == "t"
        assert team.has_member("n")
        assert not team.has_member("t")
        assert team.count() == 2

    def test_replace_member_needs_same_kind(self, team, make_candidate):
        healer = make_candidate("h", support=(1500, 1))
        with pytest.raises(ValueError):
            team.replace_member(0, healer, healer.get_primary_role())

    def test_remove_member(self, team):
        removed = team.remove_member(1)
        assert removed.candidate.uuid == "d"
        assert team.count() == 1


class TestTeams:
    def test_create_uses_settings_slots(self):
        teams = Teams.create(3)
        assert len(teams) == 3
        assert [t.name for t in teams] == ["Team 1", "Team 2", "Team 3"]
        assert teams[0].slots == {RoleKind.TANK: 2, RoleKind.DPS: 2, RoleKind.SUPPORT: 2}

    def test_teams_do_not_share_slot_maps(self):
        teams = Teams.create(2, SLOTS)
        teams[0].slots[RoleKind.TANK] = 0
        assert teams[1].slots[RoleKind.TANK] == 2

    def test_aggregates(self, make_candidate):
        teams = Teams.create(2, SLOTS)
        teams[0].add_primary_player(make_candidate("a", tank=(1000, 1)))
        teams[1].add_primary_player(make_candidate("b", dps=(2000, 1)))
        teams[1].add_primary_player(make_candidate("c", dps=(1500, 1)))
        assert teams.total_rank() == 4500
        assert teams.total_count() == 3

    def test_find_team_picks_weakest_then_first(self, make_candidate):
        teams = Teams.create(3, SLOTS)
        teams[0].add_primary_player(make_candidate("a", tank=(1000, 1)))
        role = make_candidate("x", dps=(1500, 1)).get_primary_role()
        assert teams.find_team(2, role) is teams[1]

    def test_find_team_respects_tier_size(self, make_candidate):
        teams = Teams.create(1, SLOTS)
        teams[0].add_primary_player(make_candidate("a", tank=(1000, 1)))
        teams[0].add_primary_player(make_candidate("b", dps=(1000, 1)))
        role = make_candidate("x", support=(1500, 1)).get_primary_role()
        assert teams.find_team(2, role) is None
        assert teams.find_team(3, role) is teams[0]

    def test_find_mate_needs_same_kind(self, make_candidate):
        teams = Teams.create(2, SLOTS)
        teams[0].add_primary_player(make_candidate("a", tank=(1000, 1)))
        teams[1].add_primary_player(make_candidate("b", dps=(1000, 1)))
        assert teams.find_mate(make_candidate("x", dps=(1500, 1)), 2) is teams[1]
        assert teams.find_mate(make_candidate("y", support=(1500, 1)), 2) is None

    def test_find_perfect_ensign_needs_two_members(self, make_candidate):
        teams = Teams.create(1, SLOTS)
        teams[0].add_primary_player(make_candidate("a", tank=(1000, 1)))
        healer = make_candidate("h", support=(1500, 1))
        assert teams.find_perfect_ensign(healer) is None
        teams[0].add_primary_player(make_candidate("b", dps=(1000, 1)))
        assert teams.find_perfect_ensign(healer) is teams[0]
