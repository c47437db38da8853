"""Tests for trail similarity detection."""
import math
from types import SimpleNamespace

import pytest

import dedup
from dedup import (
    Coordinate,
    MalformedCoordinate,
    SimilarityResult,
    check_similarity,
    find_similar_trails,
    generate_similarity_warning,
    haversine_m,
    parse_coordinates,
)
from schemas import TrailCandidate


def _trail(id, name='Angels Landing', difficulty='Strenuous', distance='5.4 miles',
           coordinates='37.2690,-112.9469'):
    return SimpleNamespace(id=id, name=name, difficulty=difficulty,
                           distance=distance, coordinates=coordinates)


class TestParseCoordinates:
    def test_parses_lat_lng(self):
        assert parse_coordinates('37.2690,-112.9469') == Coordinate(37.269, -112.9469)

    def test_whitespace_around_parts_is_allowed(self):
        assert parse_coordinates(' 37.2690 , -112.9469 ') == Coordinate(37.269, -112.9469)

    @pytest.mark.parametrize('value', ['', '37.2690', '1,2,3', 'abc,def', '37.2,', 'nan,1', '1,inf',
                                       '3_7.2,-112.9', '37.2,-1_12.9', '3.7e1,-112.9', '0x25,-112.9'])
    def test_malformed_values_raise(self, value):
        with pytest.raises(MalformedCoordinate):
            parse_coordinates(value)

    def test_non_string_raises(self):
        with pytest.raises(MalformedCoordinate):
            parse_coordinates(None)

    def test_malformed_is_a_value_error(self):
        assert issubclass(MalformedCoordinate, ValueError)

    def test_out_of_range_is_not_checked(self):
        assert parse_coordinates('123,456') == Coordinate(123.0, 456.0)

    def test_signs_and_bare_decimals(self):
        assert parse_coordinates('+37.,-.5') == Coordinate(37.0, -0.5)

    def test_overflowing_digits_are_not_finite(self):
        with pytest.raises(MalformedCoordinate):
            parse_coordinates('1' * 400 + ',0')


class TestHaversine:
    def test_same_point_is_zero(self):
        p = Coordinate(37.2690, -112.9469)
        assert haversine_m(p, p) == 0.0

    def test_one_degree_of_latitude(self):
        d = haversine_m(Coordinate(0.0, 0.0), Coordinate(1.0, 0.0))
        assert d == pytest.approx(6_371_000 * math.pi / 180)

    def test_symmetric(self):
        a, b = Coordinate(37.2690, -112.9469), Coordinate(37.3045, -112.9477)
        assert haversine_m(a, b) == pytest.approx(haversine_m(b, a))


class TestFindSimilarTrails:
    def test_empty_existing_list(self):
        candidate = TrailCandidate(name='X', coordinates='37.2690,-112.9469')
        assert find_similar_trails(candidate, []) == []

    def test_missing_coordinates(self):
        assert find_similar_trails(TrailCandidate(name='X'), [_trail(1)]) == []

    def test_blank_coordinates(self):
        assert find_similar_trails(TrailCandidate(name='X', coordinates='  '), [_trail(1)]) == []

    def test_self_is_excluded(self):
        candidate = TrailCandidate(id=5, name='Angels Landing', coordinates='37.2690,-112.9469',
                                   difficulty='Strenuous', distance='5.4 miles')
        assert find_similar_trails(candidate, [_trail(5)]) == []

    def test_candidate_without_id_matches_every_id(self):
        candidate = TrailCandidate(name='Angels Landing', coordinates='37.2690,-112.9469')
        assert len(find_similar_trails(candidate, [_trail(5)])) == 1

    def test_exactly_at_radius_is_included(self, monkeypatch):
        monkeypatch.setattr(dedup, 'haversine_m', lambda a, b: 1000.0)
        candidate = TrailCandidate(name='Other', coordinates='0,0', difficulty='Strenuous')
        assert len(find_similar_trails(candidate, [_trail(1)])) == 1

    def test_just_beyond_radius_is_excluded(self, monkeypatch):
        monkeypatch.setattr(dedup, 'haversine_m', lambda a, b: 1000.01)
        candidate = TrailCandidate(name='Other', coordinates='0,0', difficulty='Strenuous')
        assert find_similar_trails(candidate, [_trail(1)]) == []

    def test_real_distances_either_side_of_radius(self):
        # ~0.0045° of latitude is ~500 m, ~0.0135° is ~1500 m
        near = _trail(1, coordinates='37.2735,-112.9469')
        far = _trail(2, coordinates='37.2825,-112.9469')
        candidate = TrailCandidate(name='Nothing alike', coordinates='37.2690,-112.9469',
                                   difficulty='Strenuous')
        assert find_similar_trails(candidate, [near, far]) == [near]

    def test_difficulty_alone_is_enough(self):
        candidate = TrailCandidate(name='Scout Lookout', coordinates='37.2690,-112.9469',
                                   difficulty='Strenuous', distance='2 miles')
        assert len(find_similar_trails(candidate, [_trail(1)])) == 1

    def test_distance_alone_is_enough(self):
        candidate = TrailCandidate(name='Scout Lookout', coordinates='37.2690,-112.9469',
                                   difficulty='Easy', distance='5.4 miles')
        assert len(find_similar_trails(candidate, [_trail(1)])) == 1

    def test_distance_is_compared_as_text(self):
        candidate = TrailCandidate(name='Scout Lookout', coordinates='37.2690,-112.9469',
                                   difficulty='Easy', distance='5.40 miles')
        assert find_similar_trails(candidate, [_trail(1)]) == []

    def test_name_substring_is_case_insensitive(self):
        candidate = TrailCandidate(name='LANDING', coordinates='37.2690,-112.9469',
                                   difficulty='Easy', distance='2 miles')
        assert len(find_similar_trails(candidate, [_trail(1)])) == 1

    def test_nothing_in_common_is_excluded(self):
        candidate = TrailCandidate(name='Scout Lookout', coordinates='37.2690,-112.9469',
                                   difficulty='Easy', distance='2 miles')
        assert find_similar_trails(candidate, [_trail(1)]) == []

    @pytest.mark.parametrize('name', [None, '', '   '])
    def test_blank_name_does_not_count_as_a_match(self, name):
        candidate = TrailCandidate(name=name, coordinates='37.2690,-112.9469',
                                   difficulty='Easy', distance='2 miles')
        assert find_similar_trails(candidate, [_trail(1)]) == []

    def test_preserves_input_order(self):
        trails = [_trail(3), _trail(1, name='Scout Lookout', distance='2 miles'), _trail(2)]
        candidate = TrailCandidate(name='Angels', coordinates='37.2690,-112.9469')
        assert [t.id for t in find_similar_trails(candidate, trails)] == [3, 2]

    def test_malformed_existing_trail_is_skipped(self, caplog):
        trails = [_trail(1, coordinates='not-a-coordinate'), _trail(2)]
        candidate = TrailCandidate(name='Angels', coordinates='37.2690,-112.9469')
        with caplog.at_level('WARNING', logger='dedup'):
            result = find_similar_trails(candidate, trails)
        assert [t.id for t in result] == [2]
        assert 'id=1' in caplog.text

    def test_malformed_candidate_means_nothing_to_compare(self, caplog):
        candidate = TrailCandidate(name='Angels', coordinates='37.2690;-112.9469')
        with caplog.at_level('WARNING', logger='dedup'):
            assert find_similar_trails(candidate, [_trail(1)]) == []
        assert 'candidate coordinates unusable' in caplog.text

    def test_accepts_any_iterable(self):
        candidate = TrailCandidate(name='Angels', coordinates='37.2690,-112.9469')
        assert len(find_similar_trails(candidate, (t for t in [_trail(1)]))) == 1


class TestGenerateSimilarityWarning:
    def test_no_trails_no_warning(self):
        assert generate_similarity_warning([]) is None

    def test_single_trail(self):
        warning = generate_similarity_warning([_trail(1)])
        assert warning == 'Found 1 similar trail nearby:\n- Angels Landing (5.4 miles, Strenuous)'

    def test_two_trails_pluralised_in_order(self):
        trails = [_trail(1), _trail(2, name='Observation Point', distance='8 miles')]
        assert generate_similarity_warning(trails) == (
            'Found 2 similar trails nearby:\n'
            '- Angels Landing (5.4 miles, Strenuous)\n'
            '- Observation Point (8 miles, Strenuous)'
        )


class TestCheckSimilarity:
    def test_reference_scenario(self):
        candidate = TrailCandidate(name="Angel's Landing Trail", coordinates='37.2690,-112.9469',
                                   difficulty='Strenuous', distance='5.4 miles')
        existing = _trail(1)
        result = check_similarity(candidate, [existing])
        assert result.similar_trails == [existing]
        assert result.warning == 'Found 1 similar trail nearby:\n- Angels Landing (5.4 miles, Strenuous)'

    def test_no_match_result(self):
        result = check_similarity(TrailCandidate(name='X'), [_trail(1)])
        assert result.count == 0
        assert result.warning is None

    def test_to_dict(self):
        result = SimilarityResult(similar_trails=[_trail(7)], warning='w')
        assert result.to_dict() == {
            'duplicates': {'count': 1, 'ids': [7], 'names': ['Angels Landing']},
            'warning': 'w',
        }
