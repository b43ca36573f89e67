import sys
import csv
import math

from orientation import Quaternion

default_pose_trace_file = "pose_trace.json"


# row: [timestamp, play_time_s, qx, qy, qz, qw] or [timestamp, play_time_s, yaw, pitch, roll] in degrees
def parse_row(line):
    time_ms = round(float(line[1]) * 1000)
    values = [float(s) for s in line[2:] if s.strip() != '']
    if len(values) == 4:
        quaternion = tuple(values)
    elif len(values) == 3:
        (yaw, pitch, roll) = [math.radians(a) for a in values]
        q = Quaternion.from_euler(yaw, pitch, roll)
        quaternion = (q.v.x, q.v.y, q.v.z, q.w)
    else:
        raise ValueError('expected 3 euler angles or 4 quaternion components, got %d values' % len(values))
    return {'time_ms': time_ms, 'quaternion': quaternion}


if __name__ == '__main__':

    if not 2 <= len(sys.argv) < 4:
        print('Usage: %s session.csv [pose_trace.json]' % sys.argv[0])
        print('    Rows are "timestamp, play_time_s, qx, qy, qz, qw"')
        print('    or "timestamp, play_time_s, yaw, pitch, roll" with angles in degrees.')
        sys.exit(0)

    trace = []

    with open(sys.argv[1]) as file:
        for (number, line) in enumerate(csv.reader(file), 1):
            if len(line) == 0 or 'Timestamp' in line[0]:
                # skip header
                continue
            try:
                trace += [parse_row(line)]
            except ValueError as e:
                print('%s:%d: %s' % (sys.argv[1], number, e), file = sys.stderr)
                sys.exit(1)

    if len(sys.argv) == 3:
        pose_trace_file = sys.argv[2]
    else:
        pose_trace_file = default_pose_trace_file

    with open(pose_trace_file, "w") as file:
        # manual json
        file.write('[\n  ')
        entries = []
        for t in trace:
            quaternion = ', '.join(['%.3f' % q for q in t['quaternion']])
            line = '{ "time_ms": %d, "quaternion": [ %s ] }' % (t['time_ms'], quaternion)
            entries += [line]
        file.write(',\n  '.join(entries))
        file.write('\n]\n')
