"""Step 02: fixed-duration video segmentation."""
