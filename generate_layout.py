import sys

default_layout_file = 'layout.json'


def make_layout(tiles_x, tiles_y, frame_width, frame_height):
    # row-major, tile 0 at the top left
    tile_w = frame_width // tiles_x
    tile_h = frame_height // tiles_y
    layout = []
    for ty in range(tiles_y):
        for tx in range(tiles_x):
            layout += [{'x': tx * tile_w, 'y': ty * tile_h, 'w': tile_w, 'h': tile_h, 'th': tiles_x, 'tv': tiles_y}]
    return layout


if __name__ == '__main__':

    if not 5 <= len(sys.argv) < 7:
        print('Usage: %s tiles_x tiles_y frame_width frame_height [layout.json]' % sys.argv[0])
        sys.exit(0)

    (tiles_x, tiles_y, frame_width, frame_height) = [int(s) for s in sys.argv[1:5]]
    if tiles_x < 1 or tiles_y < 1 or frame_width % tiles_x != 0 or frame_height % tiles_y != 0:
        print('Frame %dx%d cannot be split into %dx%d tiles.' % (frame_width, frame_height, tiles_x, tiles_y),
              file = sys.stderr)
        sys.exit(1)

    if len(sys.argv) == 6:
        layout_file = sys.argv[5]
    else:
        layout_file = default_layout_file

    layout = make_layout(tiles_x, tiles_y, frame_width, frame_height)

    with open(layout_file, 'w') as file:
        # manual json, one tile per line
        file.write('{\n')
        file.write('  "_comment_": "tiles[tile_index] = rectangle in frame pixels and tiling factors",\n')
        file.write('  "tiles": [\n    ')
        entries = []
        for t in layout:
            entries += ['{ "x": %d, "y": %d, "w": %d, "h": %d, "th": %d, "tv": %d }' %
                        (t['x'], t['y'], t['w'], t['h'], t['th'], t['tv'])]
        file.write(',\n    '.join(entries))
        file.write('\n  ]\n}\n')
