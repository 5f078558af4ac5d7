"""
Tests for the random identifier generators.
"""

import random
import re

from utils.generators import (
    generate_car_plate,
    generate_chassis_number,
    generate_meter_number,
    generate_national_id,
)


class TestGenerators:
    def test_national_id(self):
        for _ in range(50):
            assert re.fullmatch(r"[A-Z0-9]{16}", generate_national_id())

    def test_car_plate(self):
        for _ in range(50):
            assert re.fullmatch(r"[A-Z]{3}\d{3}[A-Z]", generate_car_plate())

    def test_meter_number(self):
        for _ in range(50):
            assert re.fullmatch(r"\d{6}", generate_meter_number())

    def test_chassis_number_excludes_i_o_q(self):
        for _ in range(50):
            assert re.fullmatch(r"[A-HJ-NPR-Z0-9]{17}", generate_chassis_number())

    def test_seeded_rng_is_reproducible(self):
        for gen in (
            generate_national_id,
            generate_car_plate,
            generate_meter_number,
            generate_chassis_number,
        ):
            assert gen(random.Random(7)) == gen(random.Random(7))
