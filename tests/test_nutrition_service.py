import unittest
from itertools import permutations
from types import SimpleNamespace

from fittrack.schemas.meal_plan import MealItem
from fittrack.services.nutrition_service import (
    aggregate_totals, activity_multiplier, bmi_category, body_fat_percentage,
    calculate_bmi, calculate_bmr, calculate_daily_targets, calculate_health_metrics,
    calculate_macro_targets, calculate_tdee, fiber_needs, ideal_body_weight,
    water_intake_liters
)
from fittrack.utils.nutrition_calc import round_half_up


class TestTargetCalculator(unittest.TestCase):

    def test_bmr_male_fixture(self):
        # 88.362 + 13.397*75 + 4.799*178 - 5.677*32
        self.assertAlmostEqual(calculate_bmr(75, 178, 32, "male"), 1765.695, places=6)

    def test_bmr_female_and_other_share_equation(self):
        # 447.593 + 9.247*60 + 3.098*165 - 4.330*28
        self.assertAlmostEqual(calculate_bmr(60, 165, 28, "female"), 1392.343, places=6)
        self.assertEqual(calculate_bmr(60, 165, 28, "other"), calculate_bmr(60, 165, 28, "female"))

    def test_tdee_from_rounded_bmr(self):
        bmr = round_half_up(calculate_bmr(75, 178, 32, "male"))
        self.assertEqual(bmr, 1766)
        self.assertEqual(calculate_tdee(bmr, "moderate"), 2737)

    def test_activity_multipliers(self):
        self.assertEqual(activity_multiplier("sedentary"), 1.2)
        self.assertEqual(activity_multiplier("very-active"), 1.9)
        self.assertEqual(activity_multiplier(None), 1.55)
        with self.assertLogs("fittrack.services.nutrition_service", level="WARNING"):
            self.assertEqual(activity_multiplier("couch"), 1.55)

    def test_ideal_body_weight(self):
        self.assertEqual(ideal_body_weight(178, "male"), 73.2)
        self.assertEqual(ideal_body_weight(165, "female"), 56.9)
        # Under 5 feet: no negative adjustment
        self.assertEqual(ideal_body_weight(150, "male"), 50.0)
        self.assertEqual(ideal_body_weight(150, "other"), 50.0)

    def test_body_fat_percentage(self):
        self.assertEqual(body_fat_percentage(75, 178, "male"), 84)
        self.assertEqual(body_fat_percentage(60, 165, "female"), 54)

    def test_body_fat_outside_log_domain(self):
        self.assertEqual(body_fat_percentage(75, 60, "male"), 0)
        self.assertEqual(body_fat_percentage(0, 178, "female"), 0)

    def test_water_intake(self):
        self.assertAlmostEqual(water_intake_liters(75, "moderate"), 3.675)
        self.assertAlmostEqual(water_intake_liters(70, "sedentary"), 2.45)
        self.assertAlmostEqual(water_intake_liters(75, "unknown"), 3.675)

    def test_bmi_and_category(self):
        self.assertEqual(calculate_bmi(75, 178), 23.7)
        self.assertEqual(calculate_bmi(75, 0), 0.0)

        self.assertEqual(bmi_category(18.4).category, "UNDERWEIGHT")
        self.assertEqual(bmi_category(18.5).category, "NORMAL")
        self.assertEqual(bmi_category(24.9).label, "Normal Weight")
        self.assertEqual(bmi_category(25.0).category, "OVERWEIGHT")
        self.assertEqual(bmi_category(29.9).category, "OVERWEIGHT")
        self.assertEqual(bmi_category(30.0).category, "OBESE")

    def test_fiber_needs(self):
        self.assertEqual(fiber_needs(32, "male"), 38)
        self.assertEqual(fiber_needs(30, "female"), 25)
        self.assertEqual(fiber_needs(55, "male"), 30)
        self.assertEqual(fiber_needs(55, "female"), 21)

    def test_macro_targets(self):
        targets = calculate_macro_targets(2737, 75)
        self.assertEqual(targets.calories, 2737)
        self.assertEqual(targets.protein, 150)
        self.assertEqual(targets.carbs, 308)  # 0.45 * 2737 / 4 = 307.9
        self.assertEqual(targets.fat, 91)     # 0.3 * 2737 / 9 = 91.2

    def test_daily_targets_use_defaults_for_missing_fields(self):
        explicit = calculate_daily_targets(75, 178, 32, "male", "moderate")
        missing = calculate_daily_targets(None, None, None, None, None)
        self.assertEqual(explicit, missing)
        self.assertEqual(missing["calories"], 2737)

    def test_health_metrics(self):
        metrics = calculate_health_metrics()
        self.assertEqual(metrics.bmr, 1766)
        self.assertEqual(metrics.tdee, 2737)
        self.assertEqual(metrics.bmi, 23.7)
        self.assertEqual(metrics.bmi_category.category, "NORMAL")
        self.assertEqual(metrics.ideal_body_weight, 73.2)
        self.assertEqual(metrics.body_fat_percentage, 84)
        self.assertEqual(metrics.water_intake_liters, 4)
        self.assertEqual(metrics.fiber_grams, 38)
        self.assertEqual(metrics.targets.protein, 150)


class TestAggregateTotals(unittest.TestCase):

    def test_empty_is_zero(self):
        totals = aggregate_totals([])
        self.assertEqual(totals.model_dump(), {"calories": 0.0, "protein": 0.0, "carbs": 0.0, "fat": 0.0})

    def test_missing_fields_count_as_zero(self):
        totals = aggregate_totals([
            {"calories": 300, "protein": 20},
            {"calories": None, "carbs": 40, "fat": 10},
        ])
        self.assertEqual(totals.calories, 300)
        self.assertEqual(totals.protein, 20)
        self.assertEqual(totals.carbs, 40)
        self.assertEqual(totals.fat, 10)

    def test_mixed_item_kinds(self):
        items = [
            MealItem(meal_name="Oats", meal_type="breakfast", calories=420, protein=18, carbs=62, fat=11),
            SimpleNamespace(calories=250, protein=30, carbs=5, fat=12),
            {"calories": 80},
        ]
        totals = aggregate_totals(items)
        self.assertEqual(totals.calories, 750)
        self.assertEqual(totals.protein, 48)

    def test_order_does_not_matter(self):
        items = [{"calories": 120.5, "protein": 3}, {"calories": 480, "fat": 22}, {"calories": 310, "carbs": 41}]
        self.assertEqual(aggregate_totals(items), aggregate_totals(list(reversed(items))))

    def test_order_does_not_matter_for_fractions(self):
        items = [{"calories": 0.1, "fat": 0.7}, {"calories": 0.2, "fat": 0.1}, {"calories": 0.3, "fat": 0.2}]
        expected = aggregate_totals(items)
        for ordering in permutations(items):
            self.assertEqual(aggregate_totals(ordering), expected)
        self.assertEqual(expected.calories, 0.6)

    def test_accepts_generators(self):
        totals = aggregate_totals({"calories": c} for c in (100, 200))
        self.assertEqual(totals.calories, 300)


class TestRoundHalfUp(unittest.TestCase):

    def test_halves(self):
        self.assertEqual(round_half_up(2.5), 3)
        self.assertEqual(round_half_up(-2.5), -2)
        self.assertEqual(round_half_up(1765.695), 1766)


if __name__ == '__main__':
    unittest.main()
