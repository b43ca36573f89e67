import sys
import json
import math
from collections import namedtuple

config_file = 'headset_config.json'

# fov_x_degrees, fov_y_degrees: monocular field of view
# sample_resolution: viewport sample grid is (sample_resolution + 1) ** 2 points
ViewportConfig = namedtuple('ViewportConfig', 'fov_x_degrees fov_y_degrees sample_resolution')

DEFAULT_CONFIG = ViewportConfig(fov_x_degrees = 92.0, fov_y_degrees = 92.0, sample_resolution = 8)


def max_distance(fov_degrees):
    # width of the viewport plane at unit distance
    return 2 * math.tan(math.radians(fov_degrees) / 2)


def sample_count(config):
    return (config.sample_resolution + 1) ** 2


def check_config(config, source = '<config>'):
    for key in ['fov_x_degrees', 'fov_y_degrees']:
        fov = getattr(config, key)
        if not 0 < fov < 180:
            raise ValueError('Headset configuration "%s" has bad "%s": %r.' % (source, key, fov))
    if config.sample_resolution < 1:
        raise ValueError('Headset configuration "%s" has bad "sample_resolution": %r.' %
                         (source, config.sample_resolution))
    return config


def load_config(path = config_file):
    with open(path) as file:
        obj = json.load(file)

    try:
        config = ViewportConfig(fov_x_degrees = float(obj.get('fov_x_degrees', DEFAULT_CONFIG.fov_x_degrees)),
                                fov_y_degrees = float(obj.get('fov_y_degrees', DEFAULT_CONFIG.fov_y_degrees)),
                                sample_resolution = int(obj.get('sample_resolution',
                                                                DEFAULT_CONFIG.sample_resolution)))
    except (TypeError, ValueError) as e:
        raise ValueError('Headset configuration "%s" is malformed: %s' % (path, e)) from e

    return check_config(config, path)


if __name__ == '__main__':
    print('%s is a headset helper module.' % sys.argv[0])
    print('See %s for configuration.' % config_file)
    print('Module provides:')
    print('    ViewportConfig: (fov_x_degrees, fov_y_degrees, sample_resolution)')
    print('    DEFAULT_CONFIG: %s' % str(DEFAULT_CONFIG))
    print('    load_config(path):')
    print('        Returns a validated ViewportConfig read from a json file.')
    print('    max_distance(fov_degrees):')
    print('        Returns 2 * tan(fov / 2), the viewport plane width at unit distance.')
    print('    sample_count(config):')
    print('        Returns the number of viewport sample points.')
