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


# Viewport tile visibility.
#
# Coordinates are normalized to [0, 1] in both the viewport and the equirectangular frame,
# x growing rightwards and y growing downwards.


import math
import numpy as np
from collections import namedtuple

import headset
from vector3 import VectorCartesian


# x y w h: tile rectangle in frame pixels
# th tv: horizontal and vertical tiling factors (frame is w * th by h * tv)
TileDescriptor = namedtuple('TileDescriptor', 'x y w h th tv')

NormalizedCoordinate = namedtuple('NormalizedCoordinate', 'x y')


class TileCoverageError(ValueError):
    pass


class AdaptionUnit:

    def __init__(self, tiles, config = headset.DEFAULT_CONFIG):
        tiles = [TileDescriptor(*t) for t in tiles]
        if len(tiles) == 0:
            raise ValueError('Tile layout is empty.')

        self.config = headset.check_config(config)
        self.tiles = tiles

        # all tiles are assumed to share the first tile's tiling factors
        first = tiles[0]
        self.frame_width = first.w * first.th
        self.frame_height = first.h * first.tv
        if self.frame_width <= 0 or self.frame_height <= 0:
            raise ValueError('Tile layout has degenerate frame size %sx%s.' % (self.frame_width, self.frame_height))

        self.build_index()

        self.max_h_dist = headset.max_distance(config.fov_x_degrees)
        self.max_v_dist = headset.max_distance(config.fov_y_degrees)

        res = config.sample_resolution
        self.sample_points = [NormalizedCoordinate(i * (1.0 / res), j * (1.0 / res))
                              for i in range(res + 1) for j in range(res + 1)]

    def build_index(self):
        # bottom-right corner of each tile -> tile index
        # A later tile with the same corner replaces an earlier one.
        mapping = {}
        for index, tile in enumerate(self.tiles):
            corner_x = (tile.x + tile.w) / self.frame_width
            corner_y = (tile.y + tile.h) / self.frame_height
            mapping.setdefault(corner_x, {})[corner_y] = index

        xs = sorted(mapping)
        self.x_bounds = np.array(xs)
        self.y_bounds = []
        self.column_tiles = []
        for corner_x in xs:
            column = mapping[corner_x]
            ys = sorted(column)
            self.y_bounds += [np.array(ys)]
            self.column_tiles += [[column[y] for y in ys]]

    def get_tile_count(self):
        return len(self.tiles)

    def get_sample_count(self):
        return len(self.sample_points)

    # Not a true containment test: each axis is searched independently for the smallest
    # boundary >= coord, which matches containment only for grid layouts.
    def map_coord_to_tile(self, coord):
        column = int(np.searchsorted(self.x_bounds, coord.x, side = 'left'))
        if column == len(self.x_bounds):
            raise TileCoverageError('x=%r is past the last tile boundary %r' % (coord.x, self.x_bounds[-1]))
        y_bounds = self.y_bounds[column]
        row = int(np.searchsorted(y_bounds, coord.y, side = 'left'))
        if row == len(y_bounds):
            raise TileCoverageError('y=%r is past the last tile boundary %r' % (coord.y, y_bounds[-1]))
        return self.column_tiles[column][row]

    def viewport_to_equirect(self, head_rotation, viewport_coord):
        u = (viewport_coord.x - 0.5) * (2 * self.max_h_dist)
        v = (0.5 - viewport_coord.y) * (2 * self.max_v_dist)

        ray = VectorCartesian(1, u, v).normalized()
        pixel = head_rotation.rotation(ray).to_spherical()

        # fixed 0.75 phase offset of the frame projection convention
        return NormalizedCoordinate(x = 1.0 - math.fmod(0.75 + pixel.theta / (2 * math.pi), 1.0),
                                    y = pixel.phi / math.pi)

    # returns {tile_index: number of sample points landing in that tile}
    def compute_tile_visibility(self, head_rotation):
        visibility = {}
        for point in self.sample_points:
            tile = self.map_coord_to_tile(self.viewport_to_equirect(head_rotation, point))
            visibility[tile] = visibility.get(tile, 0) + 1
        return visibility

    # returns a list with a weight between 0.0 and 1.0 for each tile
    def compute_tile_weights(self, head_rotation):
        visibility = self.compute_tile_visibility(head_rotation)
        samples = len(self.sample_points)
        return [visibility.get(tile, 0) / samples for tile in range(len(self.tiles))]
