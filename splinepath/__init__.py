'''
# splinepath

Editable 2D paths made of connected parametric curves.

Curve
-----
Functions and classes for paths of parametric curves defined by control points, and for the plane polylines they are sampled into.
 - curve.geometry: basic algorithms for polylines and 2D vectors.
 - curve.path: the Path base class: key point and curve accessors, interpolation by path parameter or by distance, and length evaluation.
 - curve.catmull_rom: Catmull-Rom curve interpolation with tunable alpha (uniform, centripetal, chordal) and the CatmullRomPath class.
 - curve.bezier: cubic Bezier curve interpolation and exact (de Casteljau) splitting, and the BezierPath class.
 - curve.length: approximate arc lengths by polyline sampling, cumulated length tables and length-driven sampling.
 - curve.interpolate: fit polylines to smoothing splines (using scipy.interpolate) and convert them to Bezier paths.
'''
