import json
import math
import os
import tempfile
import unittest

import headset
import calculate_metrics
import generate_layout
import generate_pose_trace
import viewport_tiles as vt
from adaption_unit import AdaptionUnit, NormalizedCoordinate, TileCoverageError, TileDescriptor
from orientation import Quaternion
from vector3 import VectorCartesian, ZeroNormError


def grid_layout(tiles_x, tiles_y, width = 1920, height = 960):
    return [TileDescriptor(**t) for t in generate_layout.make_layout(tiles_x, tiles_y, width, height)]


EULER_SAMPLES = [(0.0, 0.0, 0.0),
                 (0.3, 0.2, -0.1),
                 (1.2, -0.4, 0.5),
                 (-2.5, 1.0, 2.0),
                 (3.0, -1.3, -3.0),
                 (0.0, math.pi / 2, 0.0),
                 (0.0, -math.pi / 2, 0.0)]


class VectorTestCase(unittest.TestCase):

    def test_normalized_has_unit_norm(self):
        for v in [VectorCartesian(1, 2, 3), VectorCartesian(-0.001, 0, 0), VectorCartesian(1e6, -1e6, 3)]:
            self.assertAlmostEqual(v.normalized().norm(), 1.0)

    def test_normalized_zero_vector(self):
        with self.assertRaises(ZeroNormError):
            VectorCartesian(0, 0, 0).normalized()

    def test_products(self):
        x = VectorCartesian(1, 0, 0)
        y = VectorCartesian(0, 1, 0)
        self.assertEqual(x.cross(y), VectorCartesian(0, 0, 1))
        self.assertEqual(x.dot(y), 0)
        self.assertEqual(VectorCartesian(1, 2, 3).dot(VectorCartesian(4, 5, 6)), 32)

    def test_arithmetic(self):
        a = VectorCartesian(1, 2, 3)
        b = VectorCartesian(3, 2, 1)
        self.assertEqual(a + b, VectorCartesian(4, 4, 4))
        self.assertEqual(a - b, VectorCartesian(-2, 0, 2))
        self.assertEqual(-a, VectorCartesian(-1, -2, -3))
        self.assertEqual(a * 2, VectorCartesian(2, 4, 6))
        self.assertEqual(2 * a, VectorCartesian(2, 4, 6))
        self.assertEqual(a / 2, VectorCartesian(0.5, 1, 1.5))
        self.assertEqual(tuple(a), (1.0, 2.0, 3.0))

    def test_spherical(self):
        s = VectorCartesian(1, 0, 0).to_spherical()
        self.assertAlmostEqual(s.r, 1)
        self.assertAlmostEqual(s.theta, 0)
        self.assertAlmostEqual(s.phi, math.pi / 2)

        s = VectorCartesian(0, -2, 0).to_spherical()
        self.assertAlmostEqual(s.r, 2)
        self.assertAlmostEqual(s.theta, -math.pi / 2)

        self.assertAlmostEqual(VectorCartesian(0, 0, 1).to_spherical().phi, 0)
        self.assertAlmostEqual(VectorCartesian(0, 0, -1).to_spherical().phi, math.pi)


class QuaternionTestCase(unittest.TestCase):

    def assertQuaternionAlmostEqual(self, q1, q2, places = 7):
        for (a, b) in zip((q1.w,) + tuple(q1.v), (q2.w,) + tuple(q2.v)):
            self.assertAlmostEqual(a, b, places = places)

    def assertVectorAlmostEqual(self, v1, v2, places = 7):
        for (a, b) in zip(v1, v2):
            self.assertAlmostEqual(a, b, places = places)

    def test_constructors(self):
        self.assertEqual(Quaternion(2), Quaternion.from_wxyz(2, 0, 0, 0))
        self.assertEqual(Quaternion(VectorCartesian(1, 2, 3)), Quaternion.from_wxyz(0, 1, 2, 3))
        self.assertEqual(Quaternion.from_vector(VectorCartesian(1, 2, 3)), Quaternion(0, VectorCartesian(1, 2, 3)))
        self.assertTrue(Quaternion(VectorCartesian(1, 2, 3)).is_pure())
        self.assertFalse(Quaternion(1).is_pure())

    def test_equality_ignores_unit_hint(self):
        q = Quaternion.from_wxyz(1, 0, 0, 0)
        p = q.normalized()
        self.assertTrue(p.is_normalized())
        self.assertFalse(q.is_normalized())
        self.assertEqual(p, q)

    def test_hamilton_product(self):
        i = Quaternion.from_wxyz(0, 1, 0, 0)
        j = Quaternion.from_wxyz(0, 0, 1, 0)
        k = Quaternion.from_wxyz(0, 0, 0, 1)
        self.assertEqual(i * j, k)
        self.assertEqual(j * i, -k)
        self.assertEqual(i * i, Quaternion(-1))
        self.assertEqual(i * VectorCartesian(0, 1, 0), k)
        self.assertEqual(VectorCartesian(1, 0, 0) * j, k)

    def test_scalar_algebra(self):
        q = Quaternion.from_wxyz(1, 2, 3, 4)
        self.assertEqual(q * 2, Quaternion.from_wxyz(2, 4, 6, 8))
        self.assertEqual(2 * q, Quaternion.from_wxyz(2, 4, 6, 8))
        self.assertEqual(q / 2, Quaternion.from_wxyz(0.5, 1, 1.5, 2))
        self.assertEqual(q + 1, Quaternion.from_wxyz(2, 2, 3, 4))
        self.assertEqual(1 - q, Quaternion.from_wxyz(0, -2, -3, -4))
        self.assertEqual(q + VectorCartesian(1, 1, 1), Quaternion.from_wxyz(1, 3, 4, 5))
        self.assertEqual(q.dot(q), 30)
        self.assertAlmostEqual(q.norm(), math.sqrt(30))

    def test_normalize(self):
        q = Quaternion.from_wxyz(1, 2, 3, 4)
        p = q.normalized()
        self.assertFalse(q.is_normalized())
        self.assertAlmostEqual(p.norm(), 1.0)

        q.normalize()
        self.assertTrue(q.is_normalized())
        self.assertAlmostEqual(q.norm(), 1.0)
        self.assertEqual(q, p)

    def test_normalize_zero(self):
        with self.assertRaises(ZeroNormError):
            Quaternion().normalize()
        with self.assertRaises(ZeroNormError):
            Quaternion().normalized()
        with self.assertRaises(ZeroNormError):
            Quaternion().inv()
        with self.assertRaises(ZeroNormError):
            Quaternion().rotation(VectorCartesian(1, 0, 0))

    def test_conj_inv(self):
        q = Quaternion.from_wxyz(1, 2, 3, 4)
        self.assertEqual(q.conj(), Quaternion.from_wxyz(1, -2, -3, -4))
        self.assertQuaternionAlmostEqual(q * q.inv(), Quaternion(1))
        u = q.normalized()
        self.assertEqual(u.inv(), u.conj())

    def test_rotation_preserves_norm(self):
        v = VectorCartesian(1, -2, 3)
        for (yaw, pitch, roll) in EULER_SAMPLES:
            q = Quaternion.from_euler(yaw, pitch, roll)
            self.assertAlmostEqual(q.rotation(v).norm(), v.norm())

    def test_rotation_paths_agree(self):
        v = VectorCartesian(0.5, 0.25, -1)
        for (yaw, pitch, roll) in EULER_SAMPLES:
            q = Quaternion.from_euler(yaw, pitch, roll)
            scaled = q * 3
            self.assertFalse(scaled.is_normalized())
            self.assertVectorAlmostEqual(scaled.rotation(v), q.rotation(v))

    def test_rotation_yaw(self):
        q = Quaternion.from_euler(math.pi / 2, 0, 0)
        self.assertVectorAlmostEqual(q.rotation(VectorCartesian(1, 0, 0)), VectorCartesian(0, 1, 0))
        self.assertEqual(Quaternion.identity().rotation(VectorCartesian(1, 2, 3)), VectorCartesian(1, 2, 3))

    def test_from_euler_is_normalized(self):
        for (yaw, pitch, roll) in EULER_SAMPLES:
            q = Quaternion.from_euler(yaw, pitch, roll)
            self.assertTrue(q.is_normalized())
            self.assertAlmostEqual(q.norm(), 1.0)

    def test_euler_round_trip(self):
        for yaw in [-3.0, -1.0, 0.0, 0.5, 2.5]:
            for pitch in [-1.5, -0.7, 0.0, 0.3, 1.5]:
                for roll in [-2.0, 0.0, 1.1]:
                    angles = Quaternion.from_euler(yaw, pitch, roll).to_euler()
                    self.assertAlmostEqual(angles.roll, roll)
                    self.assertAlmostEqual(angles.pitch, pitch)
                    self.assertAlmostEqual(angles.yaw, yaw)

    def test_to_euler_clamps_pitch(self):
        # slightly over-long quaternion puts sin(pitch) above 1
        q = Quaternion.from_wxyz(0.7072, 0, 0.7072, 0)
        self.assertEqual(q.to_euler().pitch, math.pi / 2)
        q = Quaternion.from_wxyz(0.7072, 0, -0.7072, 0)
        self.assertEqual(q.to_euler().pitch, -math.pi / 2)

    def test_from_angle_axis(self):
        q = Quaternion.from_angle_axis(math.pi, VectorCartesian(0, 0, 5))
        self.assertQuaternionAlmostEqual(q, Quaternion.from_wxyz(0, 0, 0, 1))
        q = Quaternion.from_angle_axis(math.pi / 2, VectorCartesian(0, 0, 1))
        self.assertQuaternionAlmostEqual(q, Quaternion.from_euler(math.pi / 2, 0, 0))

    def test_exp_log(self):
        self.assertEqual(Quaternion.exp(Quaternion()), Quaternion(1))
        self.assertQuaternionAlmostEqual(Quaternion.log(Quaternion(2)), Quaternion(math.log(2)))
        for (yaw, pitch, roll) in EULER_SAMPLES:
            q = Quaternion.from_euler(yaw, pitch, roll)
            self.assertQuaternionAlmostEqual(Quaternion.exp(Quaternion.log(q)), q)
        q = Quaternion.from_wxyz(1, 2, 3, 4)
        self.assertQuaternionAlmostEqual(Quaternion.exp(Quaternion.log(q)), q)

    def test_log_zero(self):
        with self.assertRaises(ZeroNormError):
            Quaternion.log(Quaternion())

    def test_pow(self):
        q = Quaternion.from_euler(0.4, 0.1, -0.2)
        self.assertQuaternionAlmostEqual(Quaternion.pow(q, 2), q * q)
        self.assertQuaternionAlmostEqual(Quaternion.pow(q, 0), Quaternion(1))

    def test_distance(self):
        self.assertEqual(Quaternion.distance(Quaternion(1), Quaternion(1)), 0)
        self.assertAlmostEqual(Quaternion.distance(Quaternion(1), Quaternion.from_wxyz(1, 1, 1, 1)), math.sqrt(3))

    def test_orthodromic_distance(self):
        for (yaw, pitch, roll) in EULER_SAMPLES:
            q = Quaternion.from_euler(yaw, pitch, roll)
            self.assertAlmostEqual(Quaternion.orthodromic_distance(q, q), 0)
        identity = Quaternion.identity()
        self.assertAlmostEqual(Quaternion.orthodromic_distance(identity, Quaternion.from_euler(math.pi / 2, 0, 0)),
                               math.pi / 2)
        self.assertAlmostEqual(Quaternion.orthodromic_distance(identity, Quaternion.from_euler(math.pi, 0, 0)),
                               math.pi)
        # roll does not move the viewing direction
        self.assertAlmostEqual(Quaternion.orthodromic_distance(identity, Quaternion.from_euler(0, 0, 1.0)), 0)

    def test_slerp_end_points(self):
        for (a, b) in zip(EULER_SAMPLES, EULER_SAMPLES[1:]):
            q1 = Quaternion.from_euler(*a)
            q2 = Quaternion.from_euler(*b)
            if q1.dot(q2) < 0:
                q2 = -q2
            self.assertQuaternionAlmostEqual(Quaternion.slerp(q1, q2, 0), q1)
            self.assertQuaternionAlmostEqual(Quaternion.slerp(q1, q2, 1), q2)

    def test_slerp_short_way(self):
        q1 = Quaternion.from_euler(0.3, 0.2, -0.1)
        q2 = Quaternion.from_euler(1.2, -0.4, 0.5)
        self.assertGreater(q1.dot(q2), 0)
        # -q2 is the same orientation, the result lands on q2
        self.assertQuaternionAlmostEqual(Quaternion.slerp(q1, -q2, 1), q2)

    def test_slerp_half_way(self):
        q = Quaternion.slerp(Quaternion.identity(), Quaternion.from_euler(math.pi / 2, 0, 0), 0.5)
        self.assertQuaternionAlmostEqual(q, Quaternion.from_euler(math.pi / 4, 0, 0))

    def test_average_angular_velocity_zero(self):
        for (yaw, pitch, roll) in EULER_SAMPLES:
            q = Quaternion.from_euler(yaw, pitch, roll)
            self.assertVectorAlmostEqual(Quaternion.average_angular_velocity(q, q, 0.1), VectorCartesian())

    def test_average_angular_velocity_direction(self):
        q1 = Quaternion.from_wxyz(1, 0, 0, 0)
        q2 = Quaternion.from_angle_axis(0.1, VectorCartesian(0, 0, 1))
        w = Quaternion.average_angular_velocity(q1, q2, 0.1)
        self.assertAlmostEqual(w.x, 0)
        self.assertAlmostEqual(w.y, 0)
        self.assertGreater(w.z, 0)
        # arguments are not normalized in place
        self.assertFalse(q1.is_normalized())

    def test_average_angular_velocity_zero_delta(self):
        with self.assertRaises(ValueError):
            Quaternion.average_angular_velocity(Quaternion.identity(), Quaternion.identity(), 0)


class HeadsetTestCase(unittest.TestCase):

    def write_config(self, obj):
        fd, path = tempfile.mkstemp(suffix = '.json')
        with os.fdopen(fd, 'w') as file:
            json.dump(obj, file)
        self.addCleanup(os.remove, path)
        return path

    def test_default_config_file(self):
        path = os.path.join(os.path.dirname(os.path.abspath(__file__)), headset.config_file)
        self.assertEqual(headset.load_config(path), headset.DEFAULT_CONFIG)

    def test_load_config(self):
        config = headset.load_config(self.write_config({'fov_x_degrees': 100, 'sample_resolution': 4}))
        self.assertEqual(config.fov_x_degrees, 100)
        self.assertEqual(config.fov_y_degrees, 92)
        self.assertEqual(config.sample_resolution, 4)
        self.assertEqual(headset.sample_count(config), 25)

    def test_bad_config(self):
        with self.assertRaises(ValueError):
            headset.load_config(self.write_config({'fov_x_degrees': 180}))
        with self.assertRaises(ValueError):
            headset.load_config(self.write_config({'sample_resolution': 0}))
        with self.assertRaises(ValueError):
            headset.load_config(self.write_config({'fov_y_degrees': 'wide'}))

    def test_max_distance(self):
        self.assertAlmostEqual(headset.max_distance(90), 2)


class AdaptionUnitTestCase(unittest.TestCase):

    def test_single_tile_identity(self):
        au = AdaptionUnit([TileDescriptor(0, 0, 1920, 960, 1, 1)])
        self.assertEqual(au.compute_tile_visibility(Quaternion.from_wxyz(1, 0, 0, 0)), {0: 81})

    def test_single_tile_any_rotation(self):
        au = AdaptionUnit([TileDescriptor(0, 0, 1920, 960, 1, 1)])
        for (yaw, pitch, roll) in EULER_SAMPLES:
            self.assertEqual(au.compute_tile_visibility(Quaternion.from_euler(yaw, pitch, roll)), {0: 81})

    def test_counts_sum_to_sample_grid(self):
        au = AdaptionUnit(grid_layout(4, 3, 3840, 1920))
        self.assertEqual(au.get_sample_count(), 81)
        for (yaw, pitch, roll) in EULER_SAMPLES:
            visibility = au.compute_tile_visibility(Quaternion.from_euler(yaw, pitch, roll))
            self.assertEqual(sum(visibility.values()), 81)
            for tile in visibility:
                self.assertTrue(0 <= tile < 12)

    def test_quadrants_identity(self):
        au = AdaptionUnit(grid_layout(2, 2))
        # the +x view direction lands in the left half of the frame
        self.assertEqual(au.compute_tile_visibility(Quaternion.identity()), {0: 45, 2: 36})

    def test_quadrants_centered(self):
        au = AdaptionUnit(grid_layout(2, 2))
        visibility = au.compute_tile_visibility(Quaternion.from_euler(-math.pi / 2, 0, 0))
        self.assertEqual(set(visibility), {0, 1, 2, 3})
        self.assertEqual(sum(visibility.values()), 81)

    def test_view_center(self):
        au = AdaptionUnit(grid_layout(2, 2))
        center = au.viewport_to_equirect(Quaternion.identity(), NormalizedCoordinate(0.5, 0.5))
        self.assertAlmostEqual(center.x, 0.25)
        self.assertAlmostEqual(center.y, 0.5)
        center = au.viewport_to_equirect(Quaternion.from_euler(-math.pi / 2, 0, 0), NormalizedCoordinate(0.5, 0.5))
        self.assertAlmostEqual(center.x, 0.5)

    def test_boundaries_are_inclusive(self):
        au = AdaptionUnit(grid_layout(2, 2))
        self.assertEqual(au.map_coord_to_tile(NormalizedCoordinate(0.5, 0.5)), 0)
        self.assertEqual(au.map_coord_to_tile(NormalizedCoordinate(0.5001, 0.5)), 1)
        self.assertEqual(au.map_coord_to_tile(NormalizedCoordinate(0.0, 1.0)), 2)
        self.assertEqual(au.map_coord_to_tile(NormalizedCoordinate(1.0, 0.75)), 3)

    def test_declaration_order(self):
        tiles = grid_layout(2, 2)
        au = AdaptionUnit(list(reversed(tiles)))
        self.assertEqual(au.map_coord_to_tile(NormalizedCoordinate(0.25, 0.25)), 3)
        self.assertEqual(au.map_coord_to_tile(NormalizedCoordinate(0.75, 0.75)), 0)

    def test_outside_coverage(self):
        au = AdaptionUnit([TileDescriptor(0, 0, 960, 960, 2, 1)])
        with self.assertRaises(TileCoverageError):
            au.map_coord_to_tile(NormalizedCoordinate(0.7, 0.5))
        au = AdaptionUnit([TileDescriptor(0, 0, 960, 480, 1, 2)])
        with self.assertRaises(TileCoverageError):
            au.map_coord_to_tile(NormalizedCoordinate(0.5, 0.7))

    def test_bad_layouts(self):
        with self.assertRaises(ValueError):
            AdaptionUnit([])
        with self.assertRaises(ValueError):
            AdaptionUnit([TileDescriptor(0, 0, 0, 960, 1, 1)])

    def test_weights(self):
        au = AdaptionUnit(grid_layout(4, 3, 3840, 1920))
        weights = au.compute_tile_weights(Quaternion.from_euler(0.5, 0.2, 0))
        self.assertEqual(len(weights), 12)
        self.assertAlmostEqual(sum(weights), 1.0)
        self.assertTrue(all(0.0 <= w <= 1.0 for w in weights))

    def test_sample_resolution_config(self):
        config = headset.ViewportConfig(fov_x_degrees = 110, fov_y_degrees = 90, sample_resolution = 4)
        au = AdaptionUnit(grid_layout(4, 3, 3840, 1920), config)
        self.assertEqual(au.get_sample_count(), 25)
        visibility = au.compute_tile_visibility(Quaternion.from_euler(1.0, -0.3, 0.2))
        self.assertEqual(sum(visibility.values()), 25)

    def test_query_leaves_state(self):
        au = AdaptionUnit(grid_layout(4, 3, 3840, 1920))
        q = Quaternion.from_euler(0.7, 0.1, 0)
        first = au.compute_tile_visibility(q)
        first[0] = -1
        self.assertEqual(au.compute_tile_visibility(q), au.compute_tile_visibility(q))
        self.assertNotEqual(au.compute_tile_visibility(q).get(0), -1)


class UserModelTestCase(unittest.TestCase):

    def setUp(self):
        self.trace = [vt.PoseInformation(play_time = 1000, pose = Quaternion.identity()),
                      vt.PoseInformation(play_time = 2000, pose = Quaternion.from_euler(math.pi / 2, 0, 0)),
                      vt.PoseInformation(play_time = 3000, pose = Quaternion.from_euler(math.pi / 2, 0, 0))]
        self.user_model = vt.UserModel(self.trace)

    def test_interpolation(self):
        (pose, end_time) = self.user_model.get_pose(1500)
        self.assertEqual(end_time, 2000)
        angles = pose.to_euler()
        self.assertAlmostEqual(angles.yaw, math.pi / 4)
        self.assertAlmostEqual(pose.norm(), 1.0)

    def test_before_and_after_trace(self):
        (pose, end_time) = self.user_model.get_pose(0)
        self.assertEqual(pose, Quaternion.identity())
        self.assertEqual(end_time, 2000)
        (pose, end_time) = self.user_model.get_pose(5000)
        self.assertIsNone(end_time)
        self.assertAlmostEqual(pose.to_euler().yaw, math.pi / 2)
        # going back in time restarts the search
        (pose, end_time) = self.user_model.get_pose(1000)
        self.assertEqual(pose, Quaternion.identity())

    def test_iterator(self):
        poses = list(self.user_model.get_iterator())
        self.assertEqual(len(poses), 3)
        self.assertIsNone(poses[-1])
        self.assertEqual(self.user_model.get_duration(), 2000)


class SessionTestCase(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def path(self, name):
        return os.path.join(self.tmp.name, name)

    def test_run(self):
        with open(self.path('layout.json'), 'w') as file:
            json.dump({'tiles': generate_layout.make_layout(4, 3, 3840, 1920)}, file)
        with open(self.path('pose_trace.json'), 'w') as file:
            json.dump([{'time_ms': 0, 'quaternion': [0, 0, 0, 1]},
                       {'time_ms': 400, 'quaternion': [0, 0, 0.383, 0.924]}], file)
        with open(self.path('headset_config.json'), 'w') as file:
            json.dump({'sample_resolution': 8}, file)

        config = {'layout': self.path('layout.json'),
                  'pose_trace': self.path('pose_trace.json'),
                  'headset_config': self.path('headset_config.json'),
                  'log_file': self.path('session.log'),
                  'visibility_csv': self.path('visibility.csv'),
                  'step_ms': 100}
        vt.Session(config).run()

        with open(self.path('visibility.csv')) as file:
            rows = file.read().splitlines()
        self.assertEqual(rows[0].split(',')[0], 'time_ms')
        self.assertEqual(len(rows), 1 + 5)
        for row in rows[1:]:
            self.assertEqual(sum(int(c) for c in row.split(',')[1:]), 81)

        with open(self.path('session.log')) as file:
            metrics = calculate_metrics.parse_log(file)
        self.assertEqual(metrics.tiles, 12)
        self.assertEqual(metrics.samples_per_pose, 81)
        self.assertEqual(metrics.poses, 5)
        self.assertEqual(metrics.motion_steps, 4)
        self.assertAlmostEqual(sum(metrics.tile_share), 1.0)
        self.assertAlmostEqual(metrics.orthodromic_total, math.pi / 4, places = 2)

    def test_bad_layout(self):
        with open(self.path('layout.json'), 'w') as file:
            json.dump({'tiles': [{'x': 0, 'y': 0}]}, file)
        with self.assertRaises(ValueError):
            vt.load_layout(self.path('layout.json'))

    def test_format_visibility(self):
        self.assertEqual(vt.format_visibility({2: 36, 0: 45}), '0:45 2:36')


class ToolsTestCase(unittest.TestCase):

    def test_make_layout(self):
        layout = generate_layout.make_layout(4, 3, 3840, 1920)
        self.assertEqual(len(layout), 12)
        self.assertEqual(layout[5], {'x': 960, 'y': 640, 'w': 960, 'h': 640, 'th': 4, 'tv': 3})

    def test_parse_euler_row(self):
        entry = generate_pose_trace.parse_row(['t', '1.5', '90', '0', '0'])
        self.assertEqual(entry['time_ms'], 1500)
        q = Quaternion.from_euler(math.pi / 2, 0, 0)
        for (a, b) in zip(entry['quaternion'], (q.v.x, q.v.y, q.v.z, q.w)):
            self.assertAlmostEqual(a, b)

    def test_parse_quaternion_row(self):
        entry = generate_pose_trace.parse_row(['t', '0.25', '0', '0', '0', '1'])
        self.assertEqual(entry, {'time_ms': 250, 'quaternion': (0.0, 0.0, 0.0, 1.0)})
        with self.assertRaises(ValueError):
            generate_pose_trace.parse_row(['t', '0.25', '0', '1'])

    def test_parse_log(self):
        lines = ['[0.000] layout: tiles:2 frame:1920x960 samples:4',
                 '[0.000] pose: 1.000000 0.000000 0.000000 0.000000',
                 '[0.000] visibility: 0:4',
                 '[0.100] visibility: 0:2 1:2',
                 '[0.100] motion: angular_velocity:(0.000000, 0.000000, -1.500000) rad/s orthodromic:0.150000 rad']
        metrics = calculate_metrics.parse_log(lines)
        self.assertEqual(metrics.poses, 2)
        self.assertAlmostEqual(metrics.tile_share[0], 0.75)
        self.assertAlmostEqual(metrics.tile_share[1], 0.25)
        self.assertAlmostEqual(metrics.visible_tiles, 1.5)
        self.assertEqual(metrics.max_visible_tiles, 2)
        self.assertAlmostEqual(metrics.angular_speed, 1.5)
        self.assertAlmostEqual(metrics.orthodromic_total, 0.15)


if __name__ == '__main__':
    unittest.main()
