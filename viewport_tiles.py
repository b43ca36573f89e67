# Copyright (c) 2020, authors
# All rights reserved.
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions are met:
#
# 1. Redistributions of source code must retain the above copyright notice, this
#    list of conditions and the following disclaimer.
# 2. Redistributions in binary form must reproduce the above copyright notice,
#    this list of conditions and the following disclaimer in the documentation
#    and/or other materials provided with the distribution.
#
# THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS" AND
# ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE IMPLIED
# WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE
# DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT OWNER OR CONTRIBUTORS BE LIABLE FOR
# ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES
# (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES;
# LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND
# ON ANY THEORY OF LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT
# (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE OF THIS
# SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.


# Units used throughout:
#     time : ms (log timestamps in s)
#     angle: radians


import csv
import json
import sys
from collections import namedtuple

import headset
from adaption_unit import AdaptionUnit, TileDescriptor
from orientation import Quaternion
from vector3 import VectorCartesian


def load_json(path):
    with open(path) as file:
        obj = json.load(file)
    return obj


# play_time: video presentation time for given head pose
# pose: unit Quaternion
PoseInformation = namedtuple('PoseInformation', 'play_time pose')


def load_layout(path):
    raw_layout = load_json(path)
    raw_tiles = raw_layout['tiles'] if isinstance(raw_layout, dict) else raw_layout
    try:
        tiles = [TileDescriptor(x = t['x'], y = t['y'], w = t['w'], h = t['h'], th = t['th'], tv = t['tv'])
                 for t in raw_tiles]
    except KeyError as e:
        raise ValueError('Tile layout "%s" has a tile without %s.' % (path, e)) from e
    if len(tiles) == 0:
        raise ValueError('Tile layout "%s" has no tiles.' % path)
    return tiles


def load_pose_trace(path):
    raw_pose_trace = load_json(path)
    pose_trace = []
    for p in raw_pose_trace:
        # stored as (qx, qy, qz, qw)
        (qx, qy, qz, qw) = p['quaternion']
        pose = Quaternion(qw, VectorCartesian(qx, qy, qz))
        pose_trace += [PoseInformation(play_time = p['time_ms'], pose = pose.normalized())]
    if len(pose_trace) == 0:
        raise ValueError('Pose trace "%s" is empty.' % path)
    return pose_trace


def format_pose(pose):
    return '%.6f %.6f %.6f %.6f' % (pose.w, pose.v.x, pose.v.y, pose.v.z)


def format_visibility(visibility):
    return ' '.join(['%d:%d' % (tile, visibility[tile]) for tile in sorted(visibility)])


class LogFile:
    def __init__(self, path):
        self.fo = open(path, 'w')

    def close(self):
        self.fo.close()

    def log_str(self, time, s):
        self.fo.write('[%.3f] %s\n' % (time / 1000, s))
        self.fo.flush()

    def log_layout(self, adaption_unit):
        self.log_str(0, 'layout: tiles:%d frame:%dx%d samples:%d' % (adaption_unit.get_tile_count(),
                                                                    adaption_unit.frame_width,
                                                                    adaption_unit.frame_height,
                                                                    adaption_unit.get_sample_count()))

    def log_pose(self, time, pose):
        self.log_str(time, 'pose: %s' % format_pose(pose))

    def log_visibility(self, time, visibility):
        self.log_str(time, 'visibility: %s' % format_visibility(visibility))

    def log_motion(self, time, velocity, distance):
        self.log_str(time, 'motion: angular_velocity:%s rad/s orthodromic:%.6f rad' % (str(velocity), distance))


class UserModel:

    def __init__(self, pose_trace):
        self.pose_trace = pose_trace
        self.last_index = 0

    def get_duration(self):
        return self.pose_trace[-1].play_time - self.pose_trace[0].play_time

    # returns the pose at time, interpolated between trace samples, and the time of the next sample
    def get_pose(self, time):
        index = self.last_index
        if time < self.pose_trace[index].play_time:
            index = 0
        while index + 1 < len(self.pose_trace) and time >= self.pose_trace[index + 1].play_time:
            index += 1
        self.last_index = index

        pose_info = self.pose_trace[index]
        if index + 1 >= len(self.pose_trace):
            return (pose_info.pose, None)

        next_pose_info = self.pose_trace[index + 1]
        end_time = next_pose_info.play_time
        if time <= pose_info.play_time:
            return (pose_info.pose, end_time)
        k = (time - pose_info.play_time) / (next_pose_info.play_time - pose_info.play_time)
        pose = Quaternion.slerp(pose_info.pose, next_pose_info.pose, k)
        return (pose.normalized(), end_time)

    def get_iterator(self):
        last_pose_info = None
        for pose_info in self.pose_trace:
            if last_pose_info is None or pose_info.pose != last_pose_info.pose:
                last_pose_info = pose_info
                yield pose_info
        yield None


class Session:

    def __init__(self, config):
        self.config = config

        self.headset_config = headset.load_config(config['headset_config'])
        self.tiles = load_layout(config['layout'])
        self.pose_trace = load_pose_trace(config['pose_trace'])
        self.step = config['step_ms']
        if self.step <= 0:
            raise ValueError('step_ms must be positive, got %r.' % self.step)

        self.adaption_unit = AdaptionUnit(self.tiles, self.headset_config)
        self.user_model = UserModel(self.pose_trace)

        self.log_file = LogFile(config['log_file'])
        self.log_file.log_layout(self.adaption_unit)

    def run(self):
        start = self.pose_trace[0].play_time
        end = start + self.user_model.get_duration()
        tiles = self.adaption_unit.get_tile_count()

        csv_file = None
        writer = None
        if self.config['visibility_csv']:
            csv_file = open(self.config['visibility_csv'], 'w', newline = '')
            writer = csv.writer(csv_file)
            writer.writerow(['time_ms'] + ['tile_%d' % t for t in range(tiles)])

        try:
            time = start
            last_pose = None
            while time <= end:
                (pose, _) = self.user_model.get_pose(time)
                visibility = self.adaption_unit.compute_tile_visibility(pose)

                self.log_file.log_pose(time, pose)
                self.log_file.log_visibility(time, visibility)
                if last_pose is not None:
                    velocity = Quaternion.average_angular_velocity(last_pose, pose, self.step / 1000)
                    distance = Quaternion.orthodromic_distance(last_pose, pose)
                    self.log_file.log_motion(time, velocity, distance)

                if writer is not None:
                    writer.writerow([time] + [visibility.get(t, 0) for t in range(tiles)])

                last_pose = pose
                time += self.step
        finally:
            if csv_file is not None:
                csv_file.close()
            self.log_file.close()


if __name__ == '__main__':

    default_config = {}
    default_config['layout'] = 'layout.json'
    default_config['pose_trace'] = 'pose_trace.json'
    default_config['headset_config'] = headset.config_file
    default_config['log_file'] = 'session.log'
    default_config['visibility_csv'] = ''
    default_config['step_ms'] = 100

    config = default_config.copy()

    float_args = ['step_ms']

    for arg in sys.argv[1:]:
        entry = arg.split('=')
        bad_argument = False
        if len(entry) != 2 or entry[0] not in config:
            bad_argument = True
        elif entry[0] in float_args:
            try:
                config[entry[0]] = float(entry[1])
            except ValueError:
                bad_argument = True
        else:
            config[entry[0]] = entry[1]

        if bad_argument:
            print('Bad argument: "%s"' % arg, file = sys.stderr)

    try:
        session = Session(config)
    except (OSError, ValueError, KeyError) as e:
        print('Cannot start session: %s' % e, file = sys.stderr)
        sys.exit(1)
    session.run()
