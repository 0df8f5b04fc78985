from datetime import date

from models.city import RestaurantType
from models.evaluation import BasicEvaluation, CompleteEvaluation, Grade
from models.restaurant import Restaurant


def vote(mappers, restaurant, like=True, day=1):
    return mappers.basic_evaluations.create(BasicEvaluation(
        visit_date=date(2024, 5, day), restaurant=restaurant, like=like, ip_address="::1",
    ))


def review(mappers, restaurant, grades, username="bob"):
    evaluation = CompleteEvaluation(
        visit_date=date(2024, 6, 1), restaurant=restaurant, comment="ok", username=username,
    )
    for criteria, value in grades:
        evaluation.add_grade(Grade(grade=value, criteria=criteria))
    return mappers.complete_evaluations.create(evaluation)


class TestEagerLoading:

    def test_evaluations_are_basic_then_complete(self, helper, mappers, roma, criteria):
        like = vote(mappers, roma)
        full = review(mappers, roma, [(criteria[0], 4)])
        dislike = vote(mappers, roma, like=False, day=2)

        loaded = helper.load_restaurant_with_evaluations(roma.id)

        assert loaded is roma
        assert loaded.evaluations == [dislike, like, full]

    def test_unknown_restaurant_returns_none(self, helper):
        assert helper.load_restaurant_with_evaluations(404) is None

    def test_load_all_fills_every_restaurant(self, helper, mappers, roma, cafe):
        vote(mappers, roma)
        vote(mappers, roma, like=False)
        vote(mappers, cafe)

        restaurants = helper.load_all_restaurants_with_evaluations()

        counts = {r.name: len(r.evaluations) for r in restaurants}
        assert counts == {"Pizzeria Roma": 2, "Café du Lac": 1}

    def test_reload_replaces_evaluation_list(self, helper, mappers, roma):
        vote(mappers, roma)
        helper.load_restaurant_with_evaluations(roma.id)
        helper.load_restaurant_with_evaluations(roma.id)

        assert len(roma.evaluations) == 1

    def test_like_counts(self, helper, mappers, roma):
        vote(mappers, roma)
        vote(mappers, roma)
        vote(mappers, roma, like=False)

        loaded = helper.load_restaurant_with_evaluations(roma.id)

        assert loaded.count_likes(True) == 2
        assert loaded.count_likes(False) == 1


class TestSearches:

    def test_search_by_name(self, helper, mappers, roma, cafe):
        vote(mappers, roma)

        results = helper.search_restaurants_by_name("piz")

        assert results == [roma]
        assert len(results[0].evaluations) == 1

    def test_search_by_city_is_case_insensitive_substring(self, helper, roma, cafe):
        assert helper.search_restaurants_by_city("neuch") == [cafe]
        assert helper.search_restaurants_by_city("LAUS") == [roma]
        assert helper.search_restaurants_by_city("Genève") == []

    def test_search_by_city_reads_all_restaurants(self, db, helper, roma, cafe):
        helper.search_restaurants_by_city("laus")

        restaurant_selects = [s for s in db.selects() if "FROM restaurants" in s]
        assert restaurant_selects and "WHERE" not in restaurant_selects[-1]

    def test_search_by_type(self, helper, roma, cafe, brasserie):
        assert helper.search_restaurants_by_type(brasserie) == [cafe]
        assert helper.search_restaurants_by_type(RestaurantType(label="Unsaved")) == []


class TestCascadeDelete:

    def test_removes_every_dependent_row(self, db, helper, mappers, roma, cafe, criteria):
        for username in ("ann", "ben", "cat"):
            review(mappers, roma, [(c, 3) for c in criteria], username=username)
        vote(mappers, roma)
        vote(mappers, roma, like=False)
        kept = vote(mappers, cafe)

        assert helper.delete_restaurant_completely(roma) is True

        assert db.rows("grades") == []
        assert db.rows("complete_evaluations") == []
        assert [r["id"] for r in db.rows("basic_evaluations")] == [kept.id]
        assert [r["name"] for r in db.rows("restaurants")] == ["Café du Lac"]
        assert roma.evaluations == []
        assert not mappers.restaurants.is_cached(roma.id)

    def test_restaurant_without_evaluations(self, db, helper, roma):
        assert helper.delete_restaurant_completely(roma) is True
        assert db.rows("restaurants") == []

    def test_refuses_null_or_unsaved(self, db, helper, lausanne, pizzeria):
        unsaved = Restaurant(name="Draft", street="Rue 1", city=lausanne, type=pizzeria)

        assert helper.delete_restaurant_completely(None) is False
        assert helper.delete_restaurant_completely(unsaved) is False
        assert not any(s.startswith("DELETE") for s in db.statements)

    def test_does_not_commit(self, db, helper, roma):
        helper.delete_restaurant_completely(roma)

        assert db.commits == 0


class TestReferenceData:

    def test_loaders(self, helper, lausanne, neuchatel, pizzeria, brasserie, criteria):
        assert helper.load_all_cities() == [lausanne, neuchatel]
        assert [t.label for t in helper.load_all_restaurant_types()] == ["Brasserie", "Pizzeria"]
        assert {c.name for c in helper.load_all_evaluation_criteria()} == {"Service", "Cuisine", "Setting"}
