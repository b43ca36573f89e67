import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import csv
import sys
import numpy as np

csv_file = 'visibility.csv'
png_file = 'visibility.png'

if len(sys.argv) > 1:
    csv_file = sys.argv[1]
if len(sys.argv) > 2:
    png_file = sys.argv[2]

x = []
y = []

with open(csv_file, 'r') as csvfile:
    plots = csv.reader(csvfile, delimiter=',')
    next(plots)  # header
    for row in plots:
        counts = np.array([int(c) for c in row[1:]])
        x.append(int(float(row[0])) / 1000)
        y.append(np.count_nonzero(counts))

plt.plot(x, y)
plt.xlabel('time (s)')
plt.ylabel('visible tiles')
plt.title('Tiles in viewport')
plt.savefig(png_file)
