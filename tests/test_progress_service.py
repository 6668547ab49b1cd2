import unittest

from fittrack.schemas.meal_plan import NutrientTotals
from fittrack.services.progress_service import build_progress, percent_of_target, variance_percent


class TestProgressProjection(unittest.TestCase):

    def test_over_target_is_capped(self):
        self.assertEqual(percent_of_target(150, 100), 100)
        self.assertEqual(variance_percent(150, 100), 50)

    def test_under_target(self):
        self.assertEqual(percent_of_target(50, 200), 25.0)
        self.assertEqual(variance_percent(50, 200), -75)

    def test_zero_target(self):
        self.assertEqual(percent_of_target(50, 0), 0)
        self.assertEqual(variance_percent(50, 0), 0)
        self.assertEqual(percent_of_target(50, None), 0)

    def test_variance_rounds_half_up(self):
        # 1000 vs 2737 -> -63.46%
        self.assertEqual(variance_percent(1000, 2737), -63)
        # 3 vs 8 -> -62.5% rounds toward +inf
        self.assertEqual(variance_percent(3, 8), -62)


class TestBuildProgress(unittest.TestCase):

    def setUp(self):
        self.targets = NutrientTotals(calories=2000, protein=150, carbs=225, fat=67)

    def test_over_summary(self):
        progress = build_progress(NutrientTotals(calories=2200, protein=160, carbs=200, fat=70), self.targets)
        self.assertEqual(progress.summary, "+10% over your calorie target")
        self.assertEqual(progress.calories.percent, 100)
        self.assertEqual(progress.calories.remaining, 0)
        self.assertEqual(progress.carbs.remaining, 25)

    def test_under_summary(self):
        progress = build_progress(NutrientTotals(calories=1500), self.targets)
        self.assertEqual(progress.summary, "25% under your calorie target")
        self.assertEqual(progress.calories.percent, 75)
        self.assertEqual(progress.protein.variance, -100)

    def test_on_target_summary(self):
        progress = build_progress(NutrientTotals(calories=2000), self.targets)
        self.assertEqual(progress.summary, "On your calorie target")

    def test_no_calorie_target(self):
        progress = build_progress(NutrientTotals(calories=500), NutrientTotals())
        self.assertIsNone(progress.summary)
        self.assertEqual(progress.calories.variance, 0)


if __name__ == '__main__':
    unittest.main()
