import unittest

from fittrack.models.user_profile import UserProfile
from tests.support import TestingSessionLocal, create_tables, drop_tables


class TestUserProfileMacros(unittest.TestCase):
    def setUp(self):
        create_tables()
        self.db = TestingSessionLocal()

    def tearDown(self):
        self.db.close()
        drop_tables()

    def test_targets_stored_on_insert(self):
        # BMR = 88.362 + 13.397*75 + 4.799*178 - 5.677*32 = 1765.7 -> 1766
        # TDEE = 1766 * 1.55 = 2737.3 -> 2737
        profile = UserProfile(
            user_id="user-1",
            gender="male",
            age=32,
            height_cm=178.0,
            weight_kg=75.0,
            activity_level="moderate",
        )
        self.db.add(profile)
        self.db.commit()

        self.assertEqual(profile.calories, 2737)
        self.assertEqual(profile.protein, 150)
        self.assertEqual(profile.carbs, 308)
        self.assertEqual(profile.fat, 91)

    def test_auto_recalculation_on_update(self):
        profile = UserProfile(
            user_id="user-2",
            gender="male",
            age=32,
            height_cm=178.0,
            weight_kg=75.0,
            activity_level="moderate",
        )
        self.db.add(profile)
        self.db.commit()
        initial_cals = profile.calories

        # Update weight to increase BMR
        profile.weight_kg = 90.0
        self.db.commit()  # Should trigger before_update

        self.assertGreater(profile.calories, initial_cals)
        # BMR 1966.7 -> 1967, TDEE 3048.9 -> 3049
        self.assertEqual(profile.calories, 3049)
        self.assertEqual(profile.protein, 180)

    def test_empty_profile_uses_defaults(self):
        profile = UserProfile(user_id="user-3")
        self.db.add(profile)
        self.db.commit()

        self.assertEqual(profile.calories, 2737)
        self.assertEqual(profile.timezone, "UTC")

    def test_activity_level_changes_targets(self):
        profile = UserProfile(user_id="user-4", gender="female", age=28, height_cm=165.0,
                              weight_kg=60.0, activity_level="sedentary")
        self.db.add(profile)
        self.db.commit()
        # BMR 1392.3 -> 1392, TDEE 1392 * 1.2 = 1670.4
        self.assertEqual(profile.calories, 1670)
        self.assertEqual(profile.protein, 120)

        profile.activity_level = "very-active"
        self.db.commit()
        # 1392 * 1.9 = 2644.8
        self.assertEqual(profile.calories, 2645)


if __name__ == '__main__':
    unittest.main()
