"""HTTP front end for the circuit builder."""
