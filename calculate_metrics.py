import re
import sys
import math

default_log_file = 'session.log'

re_timestamp = re.compile(r'\[([0-9.]+)\]')
re_layout = re.compile(r'.* layout: tiles:([0-9]+) frame:([0-9]+)x([0-9]+) samples:([0-9]+)')
re_visibility = re.compile(r'.* visibility: (.*)')
re_motion = re.compile(r'.* motion: angular_velocity:\(([-0-9.e]+), ([-0-9.e]+), ([-0-9.e]+)\) rad/s '
                       r'orthodromic:([-0-9.e]+) rad')


class VisibilityMetrics:

    def __init__(self):
        self.tiles = None
        self.samples_per_pose = None
        self.first_time = None
        self.last_time = None
        self.poses = 0
        self.tile_share = []        # running average of visible share per tile
        self.visible_tiles = 0      # running average of tiles with at least one sample point
        self.max_visible_tiles = 0
        self.motion_steps = 0
        self.angular_speed = 0      # running average of |angular velocity|
        self.orthodromic_total = 0
        self.orthodromic_max = 0

    def set_layout(self, tiles, samples_per_pose):
        self.tiles = tiles
        self.samples_per_pose = samples_per_pose
        self.tile_share = [0.0] * tiles

    def add_visibility(self, time, visibility):
        assert(self.tiles is not None)
        assert(sum(visibility.values()) == self.samples_per_pose)
        if self.first_time is None:
            self.first_time = time
        self.last_time = time
        self.poses += 1

        for tile in range(self.tiles):
            share = visibility.get(tile, 0) / self.samples_per_pose
            self.tile_share[tile] += (share - self.tile_share[tile]) / self.poses
        visible = len([c for c in visibility.values() if c > 0])
        self.visible_tiles += (visible - self.visible_tiles) / self.poses
        self.max_visible_tiles = max(self.max_visible_tiles, visible)

    def add_motion(self, velocity, distance):
        self.motion_steps += 1
        speed = math.sqrt(sum([c * c for c in velocity]))
        self.angular_speed += (speed - self.angular_speed) / self.motion_steps
        self.orthodromic_total += distance
        self.orthodromic_max = max(self.orthodromic_max, distance)


def parse_visibility(text):
    visibility = {}
    for pair in text.split():
        (tile, count) = pair.split(':')
        visibility[int(tile)] = int(count)
    return visibility


def parse_log(lines):
    metrics = VisibilityMetrics()
    for line in lines:
        timestamp_match = re_timestamp.match(line)
        if not timestamp_match:
            continue
        time = round(1000 * float(timestamp_match[1]))

        layout_match = re_layout.match(line)
        if layout_match:
            metrics.set_layout(int(layout_match[1]), int(layout_match[4]))

        visibility_match = re_visibility.match(line)
        if visibility_match:
            metrics.add_visibility(time, parse_visibility(visibility_match[1]))

        motion_match = re_motion.match(line)
        if motion_match:
            velocity = [float(motion_match[i]) for i in range(1, 4)]
            metrics.add_motion(velocity, float(motion_match[4]))
    return metrics


class OutputTable:

    def __init__(self):
        self.lines = []
        self.lens = [0] * 4

    def add(self, description, value, units, note):
        self.lines += [(description, value, units, note)]
        for i in range(4):
            self.lens[i] = max(self.lens[i], len(self.lines[-1][i]))

    def flush(self):
        format = ('%%%ds: %%%ds %%-%ds    %%s' % tuple(self.lens[:3]))
        for line in self.lines:
            print(format % line)
        self.lines = []
        self.lens = [0] * 4


if __name__ == '__main__':
    if len(sys.argv) == 2:
        log_file = sys.argv[1]
    else:
        log_file = default_log_file

    with open(log_file) as file:
        metrics = parse_log(file)

    if metrics.poses == 0:
        print('No visibility samples in "%s".' % log_file, file = sys.stderr)
        sys.exit(1)

    output = OutputTable()
    output.add('session_length', '%.3f' % ((metrics.last_time - metrics.first_time) / 1000), 's', '')
    output.add('poses', '%d' % metrics.poses, '', 'visibility computations')
    output.add('samples_per_pose', '%d' % metrics.samples_per_pose, '', 'viewport sample points')
    output.add('average_visible_tiles', '%.3f' % metrics.visible_tiles, 'tiles', 'tiles with at least one sample point')
    output.add('max_visible_tiles', '%d' % metrics.max_visible_tiles, 'tiles', '')
    output.add('average_angular_speed', '%.3f' % metrics.angular_speed, 'rad/s', '')
    output.add('total_orthodromic_distance', '%.3f' % metrics.orthodromic_total, 'rad', 'sum over pose steps')
    output.add('max_orthodromic_step', '%.3f' % metrics.orthodromic_max, 'rad', '')
    for tile in range(metrics.tiles):
        output.add('tile_%d_share' % tile, '%.6f' % metrics.tile_share[tile], '', 'average share of sample points')
    output.flush()
